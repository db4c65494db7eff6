import asyncio
from typing import Awaitable, Callable, List, Optional

from loguru import logger

from src.model.nexyai.models import AccountReport
from src.model.start import Start
from src.utils.config import Config, RunSettings
from src.utils.reader import read_tokens


async def process_account(
    index: int,
    total: int,
    token: str,
    config: Config,
    proxy: Optional[str],
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    session_factory=None,
) -> AccountReport:
    session = session_factory(index, proxy) if session_factory else None
    instance = Start(index, total, token, config, proxy, session, sleep)
    if not await instance.initialize():
        return AccountReport()
    return await instance.flow()


async def run_cycle(
    config: Config,
    settings: RunSettings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    session_factory=None,
) -> List[AccountReport]:
    tokens = read_tokens(config.FILES.TOKENS)
    if not tokens:
        logger.error(f"No tokens found in {config.FILES.TOKENS}. Exiting cycle.")
        return []

    reports = []
    total = len(tokens)
    for index, token in enumerate(tokens):
        proxy = settings.proxy_for(index)
        try:
            report = await process_account(
                index, total, token, config, proxy, sleep, session_factory
            )
        except Exception as e:
            logger.error(f"Account {index + 1}/{total} | Error processing account: {e}")
            report = AccountReport()

        reports.append(report)
        await sleep(config.SETTINGS.PAUSE_BETWEEN_ACCOUNTS)

    return reports


async def run_forever(
    config: Config,
    settings: RunSettings,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    max_cycles: Optional[int] = None,
    session_factory=None,
) -> int:
    """Run cycles back to back with a fixed pause, return the number of cycles run"""
    cycles = 0
    interval = config.SETTINGS.CYCLE_INTERVAL_HOURS * 3600

    while max_cycles is None or cycles < max_cycles:
        await run_cycle(config, settings, sleep, session_factory)
        cycles += 1
        logger.info(
            f"Cycle completed. Waiting {config.SETTINGS.CYCLE_INTERVAL_HOURS:g} hours..."
        )
        await sleep(interval)

    return cycles
