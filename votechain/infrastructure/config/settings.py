"""アプリケーション設定.

環境変数（接頭辞 ``VOTECHAIN_``）と .env ファイルから読み込む。
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEV_FALLBACK_PROVIDER_URL = "http://127.0.0.1:9545"


def find_env_file(start: Path | None = None) -> Path | None:
    """カレントディレクトリから親方向に .env を探す."""
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


ENV_FILE_PATH = find_env_file()


class Environment(str, Enum):
    """実行環境."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """votechain の設定."""

    model_config = SettingsConfigDict(
        env_prefix="VOTECHAIN_",
        env_file=ENV_FILE_PATH,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Environment.DEVELOPMENT
    provider_url: str | None = Field(
        default=None, description="ウォレットプロバイダー（JSON-RPC）のURL"
    )
    use_dev_fallback: bool = Field(
        default=True,
        description="プロバイダー未指定時にローカル開発ノードへフォールバックする",
    )
    artifact_source: str = Field(
        default="build/contracts/Voting.json",
        description="コンパイル済みコントラクト成果物のパスまたはURL",
    )
    gas_limit: int = Field(default=6654755, gt=0)
    call_timeout_seconds: float | None = Field(default=30.0, gt=0)
    receipt_timeout_seconds: float = Field(default=120.0, gt=0)
    candidate_page_size: int = Field(default=20, ge=1)
    log_level: str = "INFO"
    log_json: bool = False

    @model_validator(mode="after")
    def _no_fallback_in_production(self) -> Settings:
        if self.environment is Environment.PRODUCTION:
            if self.provider_url == DEV_FALLBACK_PROVIDER_URL:
                raise ValueError(
                    "the local development endpoint must not be used in production"
                )
        return self

    @property
    def is_production(self) -> bool:
        return self.environment is Environment.PRODUCTION

    def resolve_provider_url(self) -> str | None:
        """使用するプロバイダーURLを返す. プロバイダーが無い場合は None.

        フォールバックは開発環境でのみ有効。
        """
        if self.provider_url:
            return self.provider_url
        if not self.is_production and self.use_dev_fallback:
            return DEV_FALLBACK_PROVIDER_URL
        return None


@lru_cache
def get_settings() -> Settings:
    """キャッシュされた設定を返す."""
    return Settings()


def reload_settings() -> Settings:
    """キャッシュを破棄して設定を読み直す."""
    get_settings.cache_clear()
    return get_settings()

