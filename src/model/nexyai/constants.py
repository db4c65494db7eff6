from typing import Protocol, Callable, Awaitable, Optional

from src.utils.client import RetryClient
from src.utils.config import Config


BASE_URL = "https://api.nexyai.io"

USER_URL = f"{BASE_URL}/client/user"
TASKS_URL = f"{BASE_URL}/client/tasks"
COMPLETED_TASKS_URL = f"{BASE_URL}/client/user-tasks/completed"
VERIFY_TASK_URL = f"{BASE_URL}/client/user-tasks/verify/{{task_id}}"
CLAIM_TASK_URL = f"{BASE_URL}/client/user-tasks/claim/{{task_id}}"
REWARDS_STATISTIC_URL = f"{BASE_URL}/client/rewards/statistic"

IP_ECHO_URL = "https://api.ipify.org?format=json"

FRONTEND_ORIGIN = "https://astpoint.asterai.xyz"

REFERRAL_CATEGORY = "REF"

STATUS_IN_PROGRESS = "in_progress"
STATUS_COMPLETED = "completed"

ALREADY_CLAIMED_MARKER = "already claimed"


class NexyAIProtocol(Protocol):
    """Protocol class for NexyAI type hints to avoid circular imports"""

    context: str
    token: str
    proxy: Optional[str]
    config: Config
    client: RetryClient
    sleep: Callable[[float], Awaitable[None]]

    def headers(self) -> dict: ...
