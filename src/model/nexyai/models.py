import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Optional, Tuple

from loguru import logger

from src.model.nexyai.exceptions import IncompleteDataError


HTML_TAG_RE = re.compile(r"<[^>]+>")


def strip_html(text: Any) -> str:
    if not isinstance(text, str):
        return ""
    return HTML_TAG_RE.sub("", text)


def unwrap_data(body: Any, what: str) -> Any:
    """Return the "data" member of an API envelope"""
    if not isinstance(body, dict) or body.get("data") is None:
        raise IncompleteDataError(f"Incomplete {what} data")
    return body["data"]


class TaskStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"


class VerifyState(str, Enum):
    VERIFYING = "verifying"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    INVALID_STATUS = "invalid_status"
    FAILED = "failed"


@dataclass
class Task:
    id: str
    description: str
    category: str
    points: int
    status: TaskStatus = TaskStatus.PENDING

    @property
    def name(self) -> str:
        return self.description or "Unknown Task"

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def mark_completed(self) -> None:
        self.status = TaskStatus.COMPLETED

    @classmethod
    def from_payload(cls, item: Any, index: int, context: str = "") -> "Task":
        if not isinstance(item, dict):
            raise IncompleteDataError(f"Task #{index} is not an object: {item!r}")

        task_id = item.get("id") or f"task-{index}"
        if not item.get("description"):
            logger.warning(f"{context} | Task {task_id} has no description")

        return cls(
            id=str(task_id),
            description=strip_html(item.get("description")),
            category=item.get("category") or "N/A",
            points=item.get("points") or 0,
        )


def parse_tasks(body: Any, context: str = "") -> List[Task]:
    items = unwrap_data(body, "tasks")
    if not isinstance(items, list):
        raise IncompleteDataError("Task list is not an array")

    tasks: List[Task] = []
    seen = set()
    for index, item in enumerate(items):
        task = Task.from_payload(item, index, context)
        if task.id in seen:
            logger.warning(f"{context} | Duplicate task {task.id} dropped")
            continue
        seen.add(task.id)
        tasks.append(task)
    return tasks


def parse_completed_task_ids(body: Any) -> List[str]:
    items = unwrap_data(body, "completed tasks")
    if not isinstance(items, list):
        raise IncompleteDataError("Completed task list is not an array")

    ids = []
    for item in items:
        if not isinstance(item, dict) or item.get("task_id") is None:
            raise IncompleteDataError(f"Completed task entry without task_id: {item!r}")
        ids.append(str(item["task_id"]))
    return ids


@dataclass(frozen=True)
class UserInfo:
    username: str
    agent_address: str

    @classmethod
    def from_payload(cls, body: Any, name_field: str = "name") -> "UserInfo":
        data = unwrap_data(body, "user")
        metadata = data.get("metadata") if isinstance(data, dict) else None
        if (
            not isinstance(metadata, dict)
            or not metadata.get(name_field)
            or not data.get("agent_address")
        ):
            raise IncompleteDataError("Incomplete user data")
        return cls(username=metadata[name_field], agent_address=data["agent_address"])


@dataclass(frozen=True)
class AccountStats:
    username: str
    agent_address: str
    social_point: int
    ref_point: int
    followers: int

    @property
    def total_point(self) -> int:
        return self.social_point + self.ref_point

    @classmethod
    def from_payloads(cls, user_body: Any, rewards_body: Any) -> "AccountStats":
        user = UserInfo.from_payload(user_body, name_field="username")
        rewards = rewards_body.get("data") if isinstance(rewards_body, dict) else None
        if not isinstance(rewards, dict):
            raise IncompleteDataError("Incomplete rewards data")

        return cls(
            username=user.username,
            agent_address=user.agent_address,
            social_point=rewards.get("social") or 0,
            ref_point=rewards.get("ref") or 0,
            followers=rewards.get("follower") or 0,
        )


@dataclass(frozen=True)
class VerifyOutcome:
    success: bool
    message: str
    state: VerifyState
    min_referrals_unmet: Optional[Tuple[int, int]] = None

    @property
    def skipped(self) -> bool:
        return self.state == VerifyState.SKIPPED


@dataclass(frozen=True)
class ClaimOutcome:
    success: bool
    message: str


@dataclass
class AccountReport:
    success: bool = False
    total: int = 0
    pending: int = 0
    completed: int = 0
    skipped: int = 0
    stats: Optional[AccountStats] = None
