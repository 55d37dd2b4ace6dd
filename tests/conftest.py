import logging

import pytest
import structlog

from pinhash.config import get_settings
from pinhash.utils.phc import HashParameters
from pinhash.utils.security import PinHasher, get_hasher

FAST_PARAMS = HashParameters(memory_cost=64, time_cost=1, parallelism=1)


@pytest.fixture
def fast_params() -> HashParameters:
    return FAST_PARAMS


@pytest.fixture
def hasher() -> PinHasher:
    return PinHasher(FAST_PARAMS)


@pytest.fixture
def fast_env(monkeypatch: pytest.MonkeyPatch):
    """Point the process-wide hasher at cheap Argon2 costs."""

    monkeypatch.setenv("PINHASH_ARGON2_MEMORY_COST", "64")
    monkeypatch.setenv("PINHASH_ARGON2_TIME_COST", "1")
    monkeypatch.setenv("PINHASH_ARGON2_PARALLELISM", "1")
    get_settings.cache_clear()
    get_hasher.cache_clear()
    yield
    get_settings.cache_clear()
    get_hasher.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
