import asyncio
import sys

from loguru import logger
from rich.prompt import Confirm

from src.model.runner import run_forever
from src.utils.config import Config, RunSettings
from src.utils.logs import setup_logger
from src.utils.output import show_banner
from src.utils.reader import read_proxies


def build_run_settings(config: Config) -> RunSettings:
    use_proxy = config.SETTINGS.USE_PROXY
    if use_proxy is None:
        use_proxy = Confirm.ask("[cyan]🔌 Do you want to use proxy?", default=False)

    if not use_proxy:
        logger.info("Proceeding without proxy.")
        return RunSettings()

    proxies = read_proxies(config.FILES.PROXIES)
    if not proxies:
        logger.warning("No proxies available, proceeding without proxy.")
        return RunSettings()

    return RunSettings(use_proxy=True, proxies=proxies)


async def main():
    setup_logger()
    show_banner()

    config = Config.load()
    settings = build_run_settings(config)

    await run_forever(config, settings)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Stopped by user")
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)
