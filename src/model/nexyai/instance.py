import asyncio
from typing import Awaitable, Callable, List, Optional

from loguru import logger

from src.model.nexyai.claim import TaskClaimer
from src.model.nexyai.constants import (
    COMPLETED_TASKS_URL,
    FRONTEND_ORIGIN,
    IP_ECHO_URL,
    REWARDS_STATISTIC_URL,
    TASKS_URL,
    USER_URL,
)
from src.model.nexyai.exceptions import NexyAIError
from src.model.nexyai.models import (
    AccountStats,
    ClaimOutcome,
    Task,
    UserInfo,
    VerifyOutcome,
    parse_completed_task_ids,
    parse_tasks,
)
from src.model.nexyai.verify import TaskVerifier
from src.utils.client import RetryClient, global_headers, standard_headers
from src.utils.config import Config


class NexyAI:
    def __init__(
        self,
        context: str,
        client: RetryClient,
        config: Config,
        token: str,
        proxy: Optional[str] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.context = context
        self.client = client
        self.config = config
        self.token = token
        self.proxy = proxy
        self.sleep = sleep

        self.verifier = TaskVerifier(self)
        self.claimer = TaskClaimer(self)

    def headers(self) -> dict:
        return global_headers(self.token, FRONTEND_ORIGIN)

    async def _get(self, url: str, headers: Optional[dict] = None):
        return await self.client.request(
            "GET",
            url,
            headers=headers or self.headers(),
            retries=self.config.SETTINGS.ATTEMPTS,
            backoff=self.config.SETTINGS.INITIAL_BACKOFF,
        )

    async def get_user_info(self) -> UserInfo:
        body = await self._get(USER_URL)
        user = UserInfo.from_payload(body)
        logger.success(f"{self.context} | Fetched user: {user.username}")
        return user

    async def get_public_ip(self) -> str:
        try:
            body = await self._get(IP_ECHO_URL, headers=standard_headers())
        except NexyAIError as e:
            logger.error(f"{self.context} | Failed to get IP: {e}")
            return "Error retrieving IP"

        if isinstance(body, dict) and body.get("ip"):
            return body["ip"]
        return "Unknown"

    async def get_tasks(self) -> List[Task]:
        body = await self._get(TASKS_URL)
        return parse_tasks(body, self.context)

    async def get_completed_task_ids(self) -> List[str]:
        body = await self._get(COMPLETED_TASKS_URL)
        return parse_completed_task_ids(body)

    async def get_statistics(self) -> AccountStats:
        user_body = await self._get(USER_URL)
        rewards_body = await self._get(REWARDS_STATISTIC_URL)
        stats = AccountStats.from_payloads(user_body, rewards_body)
        logger.success(f"{self.context} | Fetched stats for {stats.username}")
        return stats

    async def verify_task(self, task: Task) -> VerifyOutcome:
        return await self.verifier.verify(task.id, task.name, task.category)

    async def claim_task(self, task: Task, max_retries: int = 5) -> ClaimOutcome:
        return await self.claimer.claim(task.id, task.name, task.category, max_retries)
