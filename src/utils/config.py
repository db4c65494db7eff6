from dataclasses import dataclass, field
from typing import List, Optional
import yaml


@dataclass
class SettingsConfig:
    USE_PROXY: Optional[bool]
    ATTEMPTS: int
    INITIAL_BACKOFF: float
    VERIFY_ATTEMPTS: int
    VERIFY_POLL_INTERVAL: float
    CLAIM_ATTEMPTS: int
    CLAIM_RETRIES: int
    PAUSE_BETWEEN_CLAIMS: float
    PAUSE_BETWEEN_TASKS: float
    PAUSE_BETWEEN_ACCOUNTS: float
    CYCLE_INTERVAL_HOURS: float


@dataclass
class FilesConfig:
    TOKENS: str
    PROXIES: str


@dataclass
class OthersConfig:
    SKIP_SSL_VERIFICATION: bool
    REQUEST_TIMEOUT: float


@dataclass
class Config:
    SETTINGS: SettingsConfig
    FILES: FilesConfig
    OTHERS: OthersConfig

    @classmethod
    def load(cls, path: str = "config.yaml") -> "Config":
        """Load configuration from yaml file"""
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        settings = data.get("SETTINGS") or {}
        files = data.get("FILES") or {}
        others = data.get("OTHERS") or {}

        config = cls(
            SETTINGS=SettingsConfig(
                USE_PROXY=settings.get("USE_PROXY"),
                ATTEMPTS=settings.get("ATTEMPTS", 3),
                INITIAL_BACKOFF=settings.get("INITIAL_BACKOFF", 2),
                VERIFY_ATTEMPTS=settings.get("VERIFY_ATTEMPTS", 6),
                VERIFY_POLL_INTERVAL=settings.get("VERIFY_POLL_INTERVAL", 10),
                CLAIM_ATTEMPTS=settings.get("CLAIM_ATTEMPTS", 3),
                CLAIM_RETRIES=settings.get("CLAIM_RETRIES", 3),
                PAUSE_BETWEEN_CLAIMS=settings.get("PAUSE_BETWEEN_CLAIMS", 5),
                PAUSE_BETWEEN_TASKS=settings.get("PAUSE_BETWEEN_TASKS", 2),
                PAUSE_BETWEEN_ACCOUNTS=settings.get("PAUSE_BETWEEN_ACCOUNTS", 5),
                CYCLE_INTERVAL_HOURS=settings.get("CYCLE_INTERVAL_HOURS", 24),
            ),
            FILES=FilesConfig(
                TOKENS=files.get("TOKENS", "data/tokens.txt"),
                PROXIES=files.get("PROXIES", "data/proxies.txt"),
            ),
            OTHERS=OthersConfig(
                SKIP_SSL_VERIFICATION=others.get("SKIP_SSL_VERIFICATION", True),
                REQUEST_TIMEOUT=others.get("REQUEST_TIMEOUT", 60),
            ),
        )
        config.validate()
        return config

    def validate(self) -> None:
        for name in ("ATTEMPTS", "VERIFY_ATTEMPTS", "CLAIM_ATTEMPTS", "CLAIM_RETRIES"):
            value = getattr(self.SETTINGS, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"SETTINGS.{name} must be a positive integer, got {value!r}")


@dataclass
class RunSettings:
    """Proxy decision made once at startup and shared by every cycle"""

    use_proxy: bool = False
    proxies: List[str] = field(default_factory=list)

    def proxy_for(self, index: int) -> Optional[str]:
        if not self.use_proxy or not self.proxies:
            return None
        return self.proxies[index % len(self.proxies)]
