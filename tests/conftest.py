import pytest
from typer.testing import CliRunner

from lambstock.core.pagination import Paginator
from lambstock.domain.models.inventory import RetryPolicy
from lambstock.infrastructure.config.settings import clear_test_config
from lambstock.infrastructure.resilience.backoff import RetryExecutor


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def sleeps():
    """Records backoff delays instead of actually waiting."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    async def _sleep(delay: float) -> None:
        sleeps.append(delay)
    return _sleep


@pytest.fixture
def retry_executor(fake_sleep):
    return RetryExecutor(policy=RetryPolicy(base_delay=0.1, jitter=False, max_retries=3), sleep=fake_sleep)


@pytest.fixture
def paginator(retry_executor):
    # None runs page fetches on the loop's default executor
    return Paginator(retry_executor, executor=None)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Keeps tests away from the developer's AWS and lambstock settings."""
    clear_test_config()
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    for var in ("LAMBSTOCK_RETRY_MAX_RETRIES", "LAMBSTOCK_RETRY_BASE_DELAY_MS", "LAMBSTOCK_LOGGING_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    yield
    clear_test_config()
