"""コンパイル済みコントラクト成果物（Truffle 形式 JSON）の読み込み.

ファイルパスと http(s) URL の両方に対応する。
"""

from __future__ import annotations

import json
import logging

from pathlib import Path
from typing import Any

import httpx

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field, ValidationError

from votechain.domain.exceptions import ArtifactLoadError


logger = logging.getLogger(__name__)


class NetworkEntry(PydanticBaseModel):
    """networks.{network_id} のエントリ."""

    model_config = ConfigDict(extra="ignore")

    address: str


class ContractArtifact(PydanticBaseModel):
    """Truffle の成果物JSON."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    contract_name: str = Field(alias="contractName")
    abi: list[dict[str, Any]]
    networks: dict[str, NetworkEntry] = Field(default_factory=dict)

    def address_for(self, network_id: str) -> str | None:
        """ネットワークIDに対応するデプロイ先アドレスを返す."""
        entry = self.networks.get(str(network_id))
        return entry.address if entry else None


class ContractArtifactLoader:
    """成果物をパスまたはURLから読み込む."""

    def __init__(self, source: str, client: httpx.AsyncClient | None = None) -> None:
        self._source = source
        self._external_client = client
        self._cached: ContractArtifact | None = None

    @property
    def source(self) -> str:
        return self._source

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def load(self) -> ContractArtifact:
        """成果物を読み込む. 2回目以降はキャッシュを返す."""
        if self._cached is not None:
            return self._cached

        data = await self._fetch_remote() if self.is_remote else self._read_local()
        try:
            artifact = ContractArtifact.model_validate(data)
        except ValidationError as e:
            raise ArtifactLoadError(f"成果物の形式が不正です: {self.source}: {e}") from e

        logger.info(
            "Loaded artifact %s from %s (%d networks)",
            artifact.contract_name,
            self.source,
            len(artifact.networks),
        )
        self._cached = artifact
        return artifact

    def _read_local(self) -> Any:
        path = Path(self.source)
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise ArtifactLoadError(f"成果物が見つかりません: {path}") from e
        except (OSError, json.JSONDecodeError) as e:
            raise ArtifactLoadError(f"成果物を読み込めません: {path}: {e}") from e

    async def _fetch_remote(self) -> Any:
        client = self._external_client or httpx.AsyncClient(timeout=30.0)
        try:
            response = await client.get(self.source)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise ArtifactLoadError(
                f"成果物の取得に失敗しました: {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise ArtifactLoadError(f"HTTPエラー: {e}") from e
        except json.JSONDecodeError as e:
            raise ArtifactLoadError(f"成果物がJSONではありません: {e}") from e
        finally:
            if self._external_client is None:
                await client.aclose()
