"""Settings のテスト."""

import pytest

from pydantic import ValidationError

from votechain.infrastructure.config.settings import (
    DEV_FALLBACK_PROVIDER_URL,
    Environment,
    Settings,
    find_env_file,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "VOTECHAIN_ENVIRONMENT",
        "VOTECHAIN_PROVIDER_URL",
        "VOTECHAIN_USE_DEV_FALLBACK",
        "VOTECHAIN_GAS_LIMIT",
    ):
        monkeypatch.delenv(key, raising=False)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)

        assert settings.environment is Environment.DEVELOPMENT
        assert settings.gas_limit == 6654755
        assert settings.call_timeout_seconds == 30.0

    def test_environment_variables(self, monkeypatch) -> None:
        monkeypatch.setenv("VOTECHAIN_PROVIDER_URL", "http://node:8545")
        monkeypatch.setenv("VOTECHAIN_GAS_LIMIT", "300000")

        settings = Settings(_env_file=None)

        assert settings.provider_url == "http://node:8545"
        assert settings.gas_limit == 300000

    def test_development_falls_back_to_local_node(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.resolve_provider_url() == DEV_FALLBACK_PROVIDER_URL

    def test_fallback_can_be_disabled(self) -> None:
        settings = Settings(_env_file=None, use_dev_fallback=False)
        assert settings.resolve_provider_url() is None

    def test_production_never_falls_back(self) -> None:
        settings = Settings(_env_file=None, environment="production")
        assert settings.resolve_provider_url() is None

    def test_production_rejects_local_endpoint(self) -> None:
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                environment="production",
                provider_url=DEV_FALLBACK_PROVIDER_URL,
            )

    def test_gas_limit_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, gas_limit=0)


class TestFindEnvFile:
    def test_finds_env_in_parent(self, tmp_path) -> None:
        (tmp_path / ".env").write_text("VOTECHAIN_GAS_LIMIT=1\n", encoding="utf-8")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)

        assert find_env_file(child) == tmp_path / ".env"
