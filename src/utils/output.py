from typing import List

from loguru import logger
from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn, TimeRemainingColumn
from rich.table import Table

from src.model.nexyai.models import AccountStats, Task, UserInfo


console = Console()


def show_banner() -> None:
    console.print(
        Panel(
            Align.center(
                "[bold cyan]NEXY AI[/bold cyan]\n"
                "[magenta]Auto complete daily & social tasks[/magenta]"
            ),
            border_style="cyan",
        )
    )
    console.print()


def print_header(title: str) -> None:
    console.rule(f"[bold magenta]{title}")


def _short(text: str, width: int = 20) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


def build_task_table(tasks: List[Task]) -> Table:
    table = Table(title="Task List", header_style="bold cyan")
    table.add_column("Task Name", width=20, no_wrap=True)
    table.add_column("Category", width=8)
    table.add_column("Point", justify="right", width=5)
    table.add_column("Status", width=9)

    for task in tasks:
        status = "[green]Complete[/green]" if task.is_completed else "[yellow]Pending[/yellow]"
        table.add_row(_short(task.name), task.category[:8], str(task.points), status)
    return table


def print_task_table(tasks: List[Task]) -> None:
    console.print()
    console.print(build_task_table(tasks))
    console.print()


def task_progress() -> Progress:
    return Progress(
        TextColumn("Processing"),
        BarColumn(bar_width=30),
        TextColumn("{task.percentage:>3.0f}%"),
        TimeRemainingColumn(),
        console=console,
    )


def display_user_info(context: str, user: UserInfo, ip: str) -> None:
    logger.info(f"{context} | Username      : {user.username}")
    logger.info(f"{context} | Agent Address : {user.agent_address}")
    logger.info(f"{context} | IP            : {ip}")


def display_stats(context: str, stats: AccountStats) -> None:
    logger.info(f"{context} | ┌─────────────────────────────────────┐")
    logger.info(f"{context} | │ Username:       {stats.username:<20}│")
    logger.info(f"{context} | │ Social Point:   {stats.social_point:<20}│")
    logger.info(f"{context} | │ Referral Point: {stats.ref_point:<20}│")
    logger.info(f"{context} | │ Total Point:    {stats.total_point:<20}│")
    logger.info(f"{context} | │ Followers:      {stats.followers:<20}│")
    logger.info(f"{context} | └─────────────────────────────────────┘")
    logger.info(f"{context} | Agent Address: {stats.agent_address}")
