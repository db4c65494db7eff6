"""Shared test fixtures."""

import pytest
from loguru import logger

from src.model.nexyai.instance import NexyAI
from src.utils.client import RetryClient
from src.utils.config import Config
from tests.fakes import FakeSession, FakeSleep


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def sleep():
    return FakeSleep()


@pytest.fixture()
def config(tmp_path):
    return Config.from_dict(
        {
            "FILES": {
                "TOKENS": str(tmp_path / "tokens.txt"),
                "PROXIES": str(tmp_path / "proxies.txt"),
            }
        }
    )


@pytest.fixture()
def nexyai(session, sleep, config):
    client = RetryClient(session, "Account 1/1", sleep)
    return NexyAI("Account 1/1", client, config, "token-1", None, sleep)


@pytest.fixture()
def log_messages():
    messages = []
    sink_id = logger.add(lambda message: messages.append(message.record), level="DEBUG")
    yield messages
    logger.remove(sink_id)
