import sys

from loguru import logger


CONSOLE_FORMAT = (
    "<light-cyan>{time:YYYY-MM-DD HH:mm:ss}</light-cyan> | "
    "<level>{level: <8}</level> | "
    "<white>{message}</white>"
)


def setup_logger(log_file: str = "logs/app.log", level: str = "INFO") -> None:
    logger.remove()
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=level, colorize=True)
    if log_file:
        logger.add(
            log_file,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {message}",
            level="DEBUG",
            rotation="10 MB",
            retention="7 days",
            encoding="utf-8",
        )
