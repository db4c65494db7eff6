from typing import List

from loguru import logger


def read_txt_file(file_name: str, file_path: str) -> List[str]:
    """Read non-empty, stripped lines from a text file"""
    with open(file_path, "r", encoding="utf-8") as file:
        items = [line.strip() for line in file]

    items = [item for item in items if item]
    logger.debug(f"Read {len(items)} {file_name} from {file_path}")
    return items


def read_tokens(file_path: str = "data/tokens.txt") -> List[str]:
    try:
        tokens = read_txt_file("tokens", file_path)
    except OSError as e:
        logger.error(f"Failed to read {file_path}: {e}")
        return []

    logger.info(f"Loaded {len(tokens)} token{'' if len(tokens) == 1 else 's'}")
    return tokens


def read_proxies(file_path: str = "data/proxies.txt") -> List[str]:
    try:
        proxies = read_txt_file("proxies", file_path)
    except FileNotFoundError:
        logger.warning(f"{file_path} not found.")
        return []
    except OSError as e:
        logger.warning(f"Failed to read {file_path}: {e}")
        return []

    if not proxies:
        logger.warning("No proxies found. Proceeding without proxy.")
    else:
        logger.info(f"Loaded {len(proxies)} prox{'y' if len(proxies) == 1 else 'ies'}")
    return proxies
