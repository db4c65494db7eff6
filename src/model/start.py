import asyncio
from typing import Awaitable, Callable, List, Optional

from loguru import logger

from src.model.nexyai.exceptions import NexyAIError
from src.model.nexyai.instance import NexyAI
from src.model.nexyai.models import AccountReport, Task
from src.utils.client import RetryClient, create_client
from src.utils.config import Config
from src.utils import output


class Start:
    def __init__(
        self,
        account_index: int,
        total: int,
        token: str,
        config: Config,
        proxy: Optional[str] = None,
        session=None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.account_index = account_index
        self.total = total
        self.token = token
        self.config = config
        self.proxy = proxy
        self.session = session
        self.sleep = sleep

        self.context = f"Account {account_index + 1}/{total}"
        self.nexyai_instance: Optional[NexyAI] = None

    async def initialize(self) -> bool:
        try:
            if self.session is None:
                self.session = await create_client(
                    self.proxy,
                    self.config.OTHERS.SKIP_SSL_VERIFICATION,
                    self.config.OTHERS.REQUEST_TIMEOUT,
                    self.context,
                )

            client = RetryClient(self.session, self.context, self.sleep)
            self.nexyai_instance = NexyAI(
                self.context,
                client,
                self.config,
                self.token,
                self.proxy,
                self.sleep,
            )
            return True
        except Exception as e:
            logger.error(f"{self.context} | Error: {e}")
            return False

    async def flow(self) -> AccountReport:
        try:
            return await self._process_account()
        finally:
            try:
                self.cleanup()
                logger.info(f"{self.context} | All sessions closed successfully")
            except Exception as e:
                logger.error(f"{self.context} | Error during cleanup: {e}")

    def cleanup(self) -> None:
        self.nexyai_instance = None
        self.session = None

    async def _process_account(self) -> AccountReport:
        report = AccountReport()
        nexyai = self.nexyai_instance

        logger.info(f"{self.context} | Starting account processing")
        output.print_header(f"Account Info {self.context}")

        try:
            user = await nexyai.get_user_info()
        except NexyAIError as e:
            logger.error(f"{self.context} | Skipping account due to user info error: {e}")
            return report

        ip = await nexyai.get_public_ip()
        output.display_user_info(self.context, user, ip)

        try:
            tasks = await nexyai.get_tasks()
        except NexyAIError as e:
            logger.error(f"{self.context} | Skipping account due to tasks error: {e}")
            return report

        try:
            completed_ids = set(await nexyai.get_completed_task_ids())
        except NexyAIError as e:
            logger.error(f"{self.context} | Skipping account due to completed tasks error: {e}")
            return report

        for task in tasks:
            if task.id in completed_ids:
                task.mark_completed()

        report.total = len(tasks)
        if not tasks:
            logger.warning(f"{self.context} | No tasks available")
            return report

        pending = [task for task in tasks if not task.is_completed]
        report.pending = len(pending)

        if not pending:
            logger.info(f"{self.context} | All tasks already completed")
            output.print_task_table(tasks)
        else:
            await self.process_tasks(pending, report)
            output.print_task_table(tasks)
            logger.info(
                f"{self.context} | Processed {report.pending} tasks: "
                f"{report.completed} completed, {report.skipped} skipped"
            )

        output.print_header(f"Account Stats {self.context}")
        try:
            report.stats = await nexyai.get_statistics()
        except NexyAIError as e:
            logger.error(f"{self.context} | Skipping stats due to error: {e}")
            return report

        output.display_stats(self.context, report.stats)
        report.success = True
        logger.success(f"{self.context} | Completed account processing")
        return report

    async def process_tasks(self, pending: List[Task], report: AccountReport) -> None:
        with output.task_progress() as progress:
            bar = progress.add_task("tasks", total=len(pending))
            for task in pending:
                try:
                    verify_result = await self.nexyai_instance.verify_task(task)
                    if verify_result.success:
                        if await self.claim_with_retries(task):
                            task.mark_completed()
                            report.completed += 1
                    elif verify_result.skipped:
                        report.skipped += 1
                except Exception as e:
                    logger.error(f"{self.context} | Error processing task {task.id}: {e}")

                progress.advance(bar)
                await self.sleep(self.config.SETTINGS.PAUSE_BETWEEN_TASKS)

    async def claim_with_retries(self, task: Task) -> bool:
        settings = self.config.SETTINGS
        max_attempts = settings.CLAIM_ATTEMPTS

        for attempt in range(1, max_attempts + 1):
            result = await self.nexyai_instance.claim_task(task, settings.CLAIM_RETRIES)
            if result.success:
                return True

            if attempt < max_attempts:
                logger.warning(
                    f"{self.context} | Retrying claim for {task.name} (Attempt {attempt + 1}/{max_attempts})"
                )
                await self.sleep(settings.PAUSE_BETWEEN_CLAIMS)

        logger.error(f"{self.context} | Failed to claim {task.name} after {max_attempts} attempts")
        return False
