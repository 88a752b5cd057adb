import os

import pytest

if hasattr(pytest, "register_assert_rewrite"):
    pytest.register_assert_rewrite("ugcache.testsuite")

# Ensure that the loggers exist for all tests
from ugcache.logger import setup_logging  # noqa: E402

setup_logging()

from ugcache.platformflags import has_identity_db  # noqa: E402


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # avoid to use anything from the outside environment:
    keys = [key for key in os.environ if key.startswith("UGCACHE_")]
    for key in keys:
        monkeypatch.delenv(key, raising=False)


def pytest_report_header(config, start_path):
    return "Tests using the OS identity database: " + ("enabled" if has_identity_db else "disabled")
