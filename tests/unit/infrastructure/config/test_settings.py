import logging

import pytest

from lambstock.domain.models.inventory import RetryPolicy
from lambstock.infrastructure.config import settings
from lambstock.infrastructure.monitoring.logger_setup import level_from_verbosity


@pytest.fixture
def yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "aws:\n"
        "  region: eu-west-1\n"
        "retry:\n"
        "  max_retries: 4\n"
        "tagging:\n"
        "  retryable_errors:\n"
        "    - InvalidParameterException\n"
        "    - ThrottledException\n"
    )
    settings.load_configuration(config_file=path, env_file=tmp_path / "missing.env", reload=True)
    yield path
    settings.load_configuration(config_file=tmp_path / "absent.yaml", env_file=tmp_path / "missing.env", reload=True)


def test_defaults_without_any_configuration(tmp_path):
    settings.load_configuration(config_file=tmp_path / "absent.yaml", env_file=tmp_path / "missing.env", reload=True)

    assert settings.get_retry_policy() == RetryPolicy(base_delay=0.1, jitter=True, max_retries=15)
    assert settings.get_credential_timeout() == pytest.approx(0.2)
    assert settings.get_tagging_retryable_errors() == ["InvalidParameterException"]
    assert settings.get_config("aws.region") is None


def test_nested_yaml_keys(yaml_config):
    assert settings.get_config("aws.region") == "eu-west-1"
    assert settings.get_retry_policy().max_retries == 4
    assert settings.get_tagging_retryable_errors() == ["InvalidParameterException", "ThrottledException"]


def test_environment_overrides_yaml(yaml_config, monkeypatch):
    monkeypatch.setenv("LAMBSTOCK_RETRY_MAX_RETRIES", "2")
    monkeypatch.setenv("LAMBSTOCK_RETRY_JITTER", "false")
    monkeypatch.setenv("LAMBSTOCK_TAGGING_RETRYABLE_ERRORS", "ThrottledException, InvalidParameterException")

    policy = settings.get_retry_policy()

    assert policy.max_retries == 2
    assert policy.jitter is False
    assert settings.get_tagging_retryable_errors() == ["ThrottledException", "InvalidParameterException"]


def test_test_overrides_win(yaml_config, monkeypatch):
    monkeypatch.setenv("LAMBSTOCK_AWS_REGION", "us-west-2")
    settings.set_config_for_testing({"aws.region": "ap-south-1"})

    assert settings.get_config("aws.region") == "ap-south-1"

    settings.clear_test_config()
    assert settings.get_config("aws.region") == "us-west-2"


def test_profile_and_region_stay_strings(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("aws:\n  profile: 123\n")
    settings.load_configuration(config_file=path, env_file=tmp_path / "missing.env", reload=True)

    assert settings.get_config("aws.profile") == "123"

    monkeypatch.setenv("LAMBSTOCK_AWS_PROFILE", "007")
    monkeypatch.setenv("LAMBSTOCK_AWS_REGION", "1.5")

    assert settings.get_config("aws.profile") == "007"
    assert settings.get_config("aws.region") == "1.5"
    assert settings.get_config("retry.max_retries") == 15


def test_env_var_name():
    assert settings.env_var_name("retry.base_delay_ms") == "LAMBSTOCK_RETRY_BASE_DELAY_MS"


@pytest.mark.parametrize("verbosity, configured, expected", [
    (0, "WARNING", logging.WARNING),
    (1, "WARNING", logging.INFO),
    (2, "WARNING", logging.DEBUG),
    (0, "debug", logging.DEBUG),
    (1, "ERROR", logging.INFO),
])
def test_level_from_verbosity(verbosity, configured, expected):
    assert level_from_verbosity(verbosity, configured) == expected
