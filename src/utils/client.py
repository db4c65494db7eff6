import asyncio
import random
from typing import Any, Awaitable, Callable, Optional

import primp
from loguru import logger

from src.model.nexyai.exceptions import NetworkError, UnsupportedProxyError
from src.utils.decorators import retry_async


USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/15.0 Safari/605.1.15",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/105.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Firefox/102.0",
]

SUPPORTED_PROXY_SCHEMES = ("http://", "https://", "socks4://", "socks5://")

BACKOFF_MULTIPLIER = 1.5


def random_user_agent() -> str:
    return random.choice(USER_AGENTS)


def global_headers(token: str, origin: str) -> dict:
    return {
        "accept": "application/json",
        "authorization": f"Bearer {token}",
        "cache-control": "no-cache",
        "origin": origin,
        "referer": f"{origin}/",
        "user-agent": random_user_agent(),
    }


def standard_headers() -> dict:
    return {
        "User-Agent": random_user_agent(),
        "Accept": "application/json",
    }


def check_proxy(proxy: Optional[str]) -> Optional[str]:
    """Return the proxy if its scheme is supported, raise otherwise"""
    if not proxy:
        return None
    if not proxy.lower().startswith(SUPPORTED_PROXY_SCHEMES):
        raise UnsupportedProxyError(proxy)
    return proxy


async def create_client(
    proxy: Optional[str],
    skip_ssl_verification: bool = True,
    timeout: float = 60,
    context: str = "",
) -> primp.AsyncClient:
    try:
        proxy = check_proxy(proxy)
    except UnsupportedProxyError as e:
        logger.warning(f"{context} | {e}. Proceeding without proxy")
        proxy = None

    return primp.AsyncClient(
        impersonate="chrome_131",
        verify=not skip_ssl_verification,
        proxy=proxy,
        timeout=timeout,
    )


def _error_body(response) -> Any:
    try:
        return response.json()
    except Exception:
        return response.text


class RetryClient:
    """Sends GET/POST requests and retries failures with exponential backoff"""

    def __init__(
        self,
        session,
        context: str = "",
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.session = session
        self.context = context
        self.sleep = sleep

    async def _send(self, method: str, url: str, payload: Any, headers: dict) -> Any:
        try:
            if method == "GET":
                response = await self.session.get(url, headers=headers)
            else:
                response = await self.session.post(url, headers=headers, json=payload)
        except Exception as e:
            raise NetworkError(f"{method} {url} failed: {e}") from e

        status_code = response.status_code
        if status_code < 200 or status_code >= 300:
            body = _error_body(response)
            message = f"Request failed with status code {status_code}"
            if isinstance(body, dict) and body.get("message"):
                message = f"{message}: {body['message']}"
            raise NetworkError(message, status_code=status_code, payload=body)

        if not response.text:
            return None

        try:
            return response.json()
        except Exception as e:
            raise NetworkError(
                f"Invalid JSON response: {response.text[:200]}",
                status_code=status_code,
                payload=response.text,
            ) from e

    async def request(
        self,
        method: str,
        url: str,
        payload: Any = None,
        headers: Optional[dict] = None,
        retries: int = 3,
        backoff: float = 2.0,
    ) -> Any:
        method = method.upper()
        if method not in ("GET", "POST"):
            raise ValueError(f"Method {method} not supported")

        send = retry_async(
            attempts=retries,
            delay=backoff,
            backoff=BACKOFF_MULTIPLIER,
            exceptions=(NetworkError,),
            sleep=self.sleep,
            label=f"{method} {url}",
            context=self.context,
        )(self._send)

        return await send(method, url, payload, headers or standard_headers())
