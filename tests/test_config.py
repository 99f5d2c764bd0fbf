"""Tests for configuration loading."""

import pytest

from linkedin_ads.core.config import ConfigurationManager, HTTPConfig, LinkedInConfig
from linkedin_ads.core.exceptions import ConfigurationError
from linkedin_ads.utils.env import get_env, get_env_float, get_env_int


class TestHTTPConfig:
    def test_defaults(self, clean_env):
        config = HTTPConfig.from_env()

        assert config.timeout == 30.0
        assert config.max_retries == 3
        assert config.retry_delay == 1.0
        assert config.max_retry_delay == 30.0
        assert config.user_agent == "linkedin-mcp-client/1.0"
        assert config.default_headers == {}

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("LINKEDIN_HTTP_TIMEOUT", "5")
        clean_env.setenv("LINKEDIN_HTTP_MAX_RETRIES", "0")
        clean_env.setenv("LINKEDIN_HTTP_RETRY_DELAY", "0.25")
        clean_env.setenv("LINKEDIN_HTTP_USER_AGENT", "etl/2.0")

        config = HTTPConfig.from_env()

        assert config.timeout == 5.0
        assert config.max_retries == 0
        assert config.retry_delay == 0.25
        assert config.user_agent == "etl/2.0"

    def test_invalid_number(self, clean_env):
        clean_env.setenv("LINKEDIN_HTTP_MAX_RETRIES", "three")

        with pytest.raises(ConfigurationError, match="LINKEDIN_HTTP_MAX_RETRIES"):
            HTTPConfig.from_env()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"timeout": 0},
            {"max_retries": -1},
            {"retry_delay": -0.1},
            {"max_retry_delay": -1},
            {"max_retries": 2.5},
            {"max_retries": True},
            {"timeout": "30"},
            {"retry_delay": None},
            {"user_agent": 1},
            {"default_headers": ["X-Team: ads"]},
            {"default_headers": {"X-Retries": 3}},
        ],
    )
    def test_validation(self, kwargs):
        with pytest.raises(ConfigurationError):
            HTTPConfig(**kwargs)


class TestLinkedInConfig:
    def test_missing_token(self, clean_env):
        with pytest.raises(ConfigurationError, match="LINKEDIN_ACCESS_TOKEN"):
            LinkedInConfig.from_env()

    def test_from_env(self, clean_env):
        clean_env.setenv("LINKEDIN_ACCESS_TOKEN", "tok")
        clean_env.setenv("LINKEDIN_ACCOUNT_ID", "512345678")

        config = LinkedInConfig.from_env()

        assert config.access_token == "tok"
        assert config.account_id == "512345678"
        assert config.base_url == "https://api.linkedin.com/rest"
        assert config.version == "202505"

    @pytest.mark.parametrize(
        "kwargs",
        [{"access_token": 12345}, {"base_url": 1}, {"version": 202505}, {"account_id": None}],
    )
    def test_validation(self, kwargs):
        values = {"access_token": "tok", **kwargs}

        with pytest.raises(ConfigurationError, match="must be a string"):
            LinkedInConfig(**values)


class TestConfigurationManager:
    def test_yaml_then_environment(self, clean_env, tmp_path):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text(
            "linkedin:\n"
            "  access_token: from-yaml\n"
            "  account_id: 111\n"
            "  version: '202406'\n"
            "http:\n"
            "  timeout: 10\n"
            "  max_retries: 5\n"
            "  default_headers:\n"
            "    X-Team: ads\n",
            encoding="utf-8",
        )
        clean_env.setenv("LINKEDIN_ACCOUNT_ID", "222")
        clean_env.setenv("LINKEDIN_HTTP_MAX_RETRIES", "1")

        config = ConfigurationManager(config_path=config_file, load_env_file=False).load_config()

        assert config.linkedin.access_token == "from-yaml"
        assert config.linkedin.account_id == "222"
        assert config.linkedin.version == "202406"
        assert config.http.timeout == 10
        assert config.http.max_retries == 1
        assert config.http.default_headers == {"X-Team": "ads"}

    def test_config_path_from_environment(self, clean_env, tmp_path):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text("linkedin:\n  access_token: tok\n", encoding="utf-8")
        clean_env.setenv("LINKEDIN_ADS_CONFIG", str(config_file))

        manager = ConfigurationManager(load_env_file=False)
        config = manager.load_config()

        assert config.linkedin.access_token == "tok"
        assert manager.get_config() is config

    def test_missing_file(self, clean_env, tmp_path):
        manager = ConfigurationManager(config_path=tmp_path / "absent.yml", load_env_file=False)

        with pytest.raises(ConfigurationError, match="not found"):
            manager.load_config()

    def test_unknown_http_key(self, clean_env, tmp_path):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text("http:\n  retries: 3\n", encoding="utf-8")
        clean_env.setenv("LINKEDIN_ACCESS_TOKEN", "tok")

        with pytest.raises(ConfigurationError, match="http"):
            ConfigurationManager(config_path=config_file, load_env_file=False).load_config()

    @pytest.mark.parametrize(
        "content",
        [
            "http:\n  max_retries: 2.5\n",
            "http:\n  default_headers: X-Team\n",
            "http: [1, 2]\n",
            "linkedin:\n  access_token: 12345\n",
            "linkedin: [tok]\n",
        ],
    )
    def test_wrongly_typed_values(self, clean_env, tmp_path, content):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text(content, encoding="utf-8")
        if "access_token" not in content:
            clean_env.setenv("LINKEDIN_ACCESS_TOKEN", "tok")

        with pytest.raises(ConfigurationError):
            ConfigurationManager(config_path=config_file, load_env_file=False).load_config()

    def test_numeric_yaml_ids_become_strings(self, clean_env, tmp_path):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text(
            "linkedin:\n  access_token: tok\n  account_id: 512345678\n  version: 202406\n",
            encoding="utf-8",
        )

        config = ConfigurationManager(config_path=config_file, load_env_file=False).load_config()

        assert config.linkedin.account_id == "512345678"
        assert config.linkedin.version == "202406"

    def test_invalid_yaml(self, clean_env, tmp_path):
        config_file = tmp_path / "linkedin.yml"
        config_file.write_text("linkedin: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="parse"):
            ConfigurationManager(config_path=config_file, load_env_file=False).load_config()

    def test_get_config_before_load(self):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(load_env_file=False).get_config()


class TestEnvHelpers:
    def test_blank_counts_as_unset(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_TEST_VALUE", "   ")
        assert get_env("LINKEDIN_TEST_VALUE", "fallback") == "fallback"

    def test_values_are_stripped(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_TEST_VALUE", " 42 ")
        assert get_env("LINKEDIN_TEST_VALUE") == "42"
        assert get_env_int("LINKEDIN_TEST_VALUE") == 42
        assert get_env_float("LINKEDIN_TEST_VALUE") == 42.0

    def test_invalid_float(self, monkeypatch):
        monkeypatch.setenv("LINKEDIN_TEST_VALUE", "soon")
        with pytest.raises(ValueError):
            get_env_float("LINKEDIN_TEST_VALUE")
