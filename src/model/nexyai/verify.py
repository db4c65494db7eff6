from loguru import logger

from src.model.nexyai.constants import (
    NexyAIProtocol,
    REFERRAL_CATEGORY,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    VERIFY_TASK_URL,
)
from src.model.nexyai.exceptions import IncompleteDataError, InvalidStatusError
from src.model.nexyai.models import VerifyOutcome, VerifyState, unwrap_data


def task_context(context: str, task_id: str) -> str:
    return f"{context}|T{task_id[-6:]}"


def _section(parent: dict, key: str) -> dict:
    value = parent.get(key) or {}
    if not isinstance(value, dict):
        raise IncompleteDataError(f"Verify field '{key}' is not an object: {value!r}")
    return value


def _count(value, name: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        raise IncompleteDataError(f"Verify field '{name}' is not a number: {value!r}")


def referral_shortfall(category: str, data: dict):
    """Return (required, invited) when a referral task needs more invites"""
    if category != REFERRAL_CATEGORY:
        return None

    task_data = _section(_section(data, "task"), "data")
    min_referrals = _count(task_data.get("min_referrals"), "min_referrals")
    if not min_referrals or not data.get("task_id"):
        return None

    invited = _count(_section(data, "user").get("invited"), "invited")
    if invited < min_referrals:
        return min_referrals, invited
    return None


class TaskVerifier:
    def __init__(self, nexyai_instance: NexyAIProtocol):
        self.nexyai = nexyai_instance

    async def _poll(self, task_id: str) -> dict:
        settings = self.nexyai.config.SETTINGS
        body = await self.nexyai.client.request(
            "POST",
            VERIFY_TASK_URL.format(task_id=task_id),
            payload={},
            headers=self.nexyai.headers(),
            retries=settings.ATTEMPTS,
            backoff=settings.INITIAL_BACKOFF,
        )
        data = unwrap_data(body, "verify")
        if not isinstance(data, dict):
            raise IncompleteDataError("Incomplete verify data")
        return data

    async def verify(self, task_id: str, task_name: str, category: str) -> VerifyOutcome:
        context = task_context(self.nexyai.context, task_id)
        settings = self.nexyai.config.SETTINGS
        max_polls = settings.VERIFY_ATTEMPTS

        logger.info(f"{context} | Verifying {task_name}...")

        try:
            polls = 0
            while True:
                data = await self._poll(task_id)
                polls += 1

                shortfall = referral_shortfall(category, data)
                if shortfall:
                    required, invited = shortfall
                    logger.warning(
                        f"{context} | Skipped: Need {required} invites, have {invited} [Category: {category}]"
                    )
                    return VerifyOutcome(
                        success=False,
                        message=f"Skipped: Insufficient invites ({invited}/{required})",
                        state=VerifyState.SKIPPED,
                        min_referrals_unmet=(required, invited),
                    )

                status = data.get("status")

                if status == STATUS_IN_PROGRESS:
                    if polls < max_polls:
                        logger.info(
                            f"{context} | Retrying {task_name} in {settings.VERIFY_POLL_INTERVAL}s..."
                        )
                        await self.nexyai.sleep(settings.VERIFY_POLL_INTERVAL)
                        continue

                    logger.warning(
                        f"{context} | Max retries reached for {task_name} [Category: {category}]"
                    )
                    return VerifyOutcome(
                        success=False,
                        message="Max retries reached: Still in progress",
                        state=VerifyState.FAILED,
                    )

                if status == STATUS_COMPLETED:
                    logger.success(f"{context} | Verified: {task_name} [Category: {category}]")
                    return VerifyOutcome(
                        success=True,
                        message=f'Task "{task_name}" verified',
                        state=VerifyState.COMPLETED,
                    )

                raise InvalidStatusError(status)

        except InvalidStatusError as e:
            logger.warning(f"{context} | {e} [Category: {category}]")
            return VerifyOutcome(
                success=False,
                message=str(e),
                state=VerifyState.INVALID_STATUS,
            )
        except Exception as e:
            logger.error(
                f"{context} | Failed to verify {task_name}: {e} [Category: {category}]"
            )
            return VerifyOutcome(
                success=False,
                message=f"Failed to verify: {e}",
                state=VerifyState.FAILED,
            )
