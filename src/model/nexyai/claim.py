from typing import Any

from loguru import logger

from src.model.nexyai.constants import (
    ALREADY_CLAIMED_MARKER,
    CLAIM_TASK_URL,
    NexyAIProtocol,
)
from src.model.nexyai.exceptions import NetworkError
from src.model.nexyai.models import ClaimOutcome
from src.model.nexyai.verify import task_context


def is_claimed(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    if body.get("statusCode") == 200:
        return True
    data = body.get("data")
    return isinstance(data, dict) and data.get("success") is True


def is_already_claimed(error: Exception) -> bool:
    return (
        isinstance(error, NetworkError)
        and error.status_code == 400
        and ALREADY_CLAIMED_MARKER in error.server_message
    )


class TaskClaimer:
    def __init__(self, nexyai_instance: NexyAIProtocol):
        self.nexyai = nexyai_instance

    async def claim(
        self, task_id: str, task_name: str, category: str, max_retries: int = 5
    ) -> ClaimOutcome:
        context = task_context(self.nexyai.context, task_id)
        settings = self.nexyai.config.SETTINGS

        logger.info(f"{context} | Claiming {task_name}...")

        try:
            for attempt in range(1, max_retries + 1):
                body = await self.nexyai.client.request(
                    "POST",
                    CLAIM_TASK_URL.format(task_id=task_id),
                    payload={},
                    headers=self.nexyai.headers(),
                    retries=settings.ATTEMPTS,
                    backoff=settings.INITIAL_BACKOFF,
                )

                if is_claimed(body):
                    logger.success(f"{context} | Task Claimed: {task_name} [Category: {category}]")
                    return ClaimOutcome(success=True, message=f'Task "{task_name}" claimed')

                if attempt < max_retries:
                    logger.info(
                        f"{context} | Retrying claim for {task_name} in {settings.PAUSE_BETWEEN_CLAIMS}s..."
                    )
                    await self.nexyai.sleep(settings.PAUSE_BETWEEN_CLAIMS)

        except Exception as e:
            if is_already_claimed(e):
                logger.success(
                    f"{context} | Task Already Claimed: {task_name} [Category: {category}]"
                )
                return ClaimOutcome(success=True, message=f'Task "{task_name}" already claimed')

            logger.error(f"{context} | Failed to claim {task_name}: {e} [Category: {category}]")
            return ClaimOutcome(success=False, message=f"Failed to claim: {e}")

        logger.warning(
            f"{context} | Failed to claim {task_name}: Invalid response [Category: {category}]"
        )
        return ClaimOutcome(success=False, message="Failed to claim: Invalid response")
