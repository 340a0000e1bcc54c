import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    # Fake credential so client construction never fails by accident
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    for name in (
        "OPENAI_API_BASE",
        "AUTOCOMMIT_LLM_MODEL",
        "AUTOCOMMIT_LLM_ENDPOINT",
        "AUTOCOMMIT_LANGUAGE",
        "AUTOCOMMIT_MAX_TOKENS",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    # The CLI installs its own handler and stops propagation; undo that so
    # caplog keeps seeing records in later tests.
    yield
    logger = logging.getLogger("autocommit")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
