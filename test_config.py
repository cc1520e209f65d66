"""
Configuration Tests

Validates GatewayConfig / RetryConfig construction, validation and
environment loading.
"""

import pytest

from gateway import GatewayConfig, RetryConfig

ENV_VARS = [
    "CMMS_GATEWAY_URL",
    "CMMS_GATEWAY_TIMEOUT",
    "CMMS_GATEWAY_MAX_RETRIES",
    "CMMS_GATEWAY_RETRY_BASE_DELAY",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No gateway variables set, and no .env file in the working directory."""
    for name in ENV_VARS:
        # setenv first so values loaded from .env files are undone too
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestGatewayConfig:
    """Validation and URL building."""

    def test_defaults(self):
        config = GatewayConfig(base_url="https://gateway.test/functions/v1/api-gateway/")

        assert config.base_url == "https://gateway.test/functions/v1/api-gateway"
        assert config.timeout_seconds == 30.0
        assert config.retry_config.max_retries == 0
        assert config.send_organization_header
        assert config.send_correlation_header

    def test_build_url(self):
        config = GatewayConfig(base_url="https://gateway.test")

        assert config.build_url("/api/assets") == "https://gateway.test/api/assets"
        assert config.build_url("api/assets") == "https://gateway.test/api/assets"

    @pytest.mark.parametrize("base_url", ["", "   "])
    def test_empty_base_url_rejected(self, base_url):
        with pytest.raises(ValueError):
            GatewayConfig(base_url=base_url)

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_non_positive_timeout_rejected(self, timeout):
        with pytest.raises(ValueError):
            GatewayConfig(base_url="https://gateway.test", timeout_seconds=timeout)

    def test_timeout_can_be_disabled(self):
        assert GatewayConfig(base_url="https://gateway.test", timeout_seconds=None).timeout_seconds is None


class TestRetryConfig:
    """Backoff arithmetic and retry eligibility."""

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryConfig(max_retries=-1)

    def test_exponential_backoff_capped(self):
        config = RetryConfig(max_retries=5, base_delay=0.5, max_delay=3.0)

        assert [config.get_delay(a) for a in range(4)] == [0.5, 1.0, 2.0, 3.0]

    def test_default_never_retries(self):
        assert not RetryConfig().should_retry("GET", 0, 503)

    def test_retry_eligibility(self):
        config = RetryConfig(max_retries=2)

        assert config.should_retry("GET", 0, 503)
        assert config.should_retry("delete", 1, 429)
        assert config.should_retry("PUT", 0)  # transport failure
        assert not config.should_retry("GET", 2, 503)  # exhausted
        assert not config.should_retry("GET", 0, 404)
        assert not config.should_retry("POST", 0, 503)
        assert not config.should_retry("PATCH", 0)


class TestFromEnv:
    """Environment loading."""

    def test_missing_url(self, clean_env):
        with pytest.raises(ValueError, match="CMMS_GATEWAY_URL"):
            GatewayConfig.from_env()

    def test_reads_variables(self, clean_env):
        clean_env.setenv("CMMS_GATEWAY_URL", "https://gateway.test/")
        clean_env.setenv("CMMS_GATEWAY_TIMEOUT", "12.5")
        clean_env.setenv("CMMS_GATEWAY_MAX_RETRIES", "3")
        clean_env.setenv("CMMS_GATEWAY_RETRY_BASE_DELAY", "0.25")

        config = GatewayConfig.from_env()

        assert config.base_url == "https://gateway.test"
        assert config.timeout_seconds == 12.5
        assert config.retry_config.max_retries == 3
        assert config.retry_config.base_delay == 0.25

    def test_zero_timeout_disables(self, clean_env):
        clean_env.setenv("CMMS_GATEWAY_URL", "https://gateway.test")
        clean_env.setenv("CMMS_GATEWAY_TIMEOUT", "0")

        assert GatewayConfig.from_env().timeout_seconds is None

    def test_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / "gateway.env"
        env_file.write_text("CMMS_GATEWAY_URL=https://from-file.test\nCMMS_GATEWAY_MAX_RETRIES=1\n")

        config = GatewayConfig.from_env(env_file)

        assert config.base_url == "https://from-file.test"
        assert config.retry_config.max_retries == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v", "-s"])
