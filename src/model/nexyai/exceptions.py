from typing import Any, Optional


class NexyAIError(Exception):
    pass


class NetworkError(NexyAIError):
    """Transport failure, timeout or non-2xx response"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Any = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload

    @property
    def server_message(self) -> str:
        if isinstance(self.payload, dict):
            message = self.payload.get("message")
            if isinstance(message, list):
                return "; ".join(str(item) for item in message)
            if message is not None:
                return str(message)
        return ""


class IncompleteDataError(NexyAIError):
    """Required field missing in a response"""


class InvalidStatusError(NexyAIError):
    def __init__(self, status: Any):
        super().__init__(f"Invalid status: {status}")
        self.status = status


class UnsupportedProxyError(NexyAIError):
    def __init__(self, proxy: str):
        super().__init__(f"Unsupported proxy: {proxy}")
        self.proxy = proxy
