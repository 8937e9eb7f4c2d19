"""JSON-RPC ウォレットプロバイダー (web3.py async)."""

from __future__ import annotations

import logging

from typing import Any

import aiohttp

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from votechain.domain.exceptions import NoAccountError, ProviderUnavailableError


logger = logging.getLogger(__name__)

# JSON-RPC "Method not found"
_METHOD_NOT_FOUND = -32601
# EIP-1193 "User Rejected Request"
_USER_REJECTED = 4001


def create_web3(provider_url: str, request_timeout: float | None = None) -> AsyncWeb3:
    """プロバイダーURLから AsyncWeb3 を生成する."""
    request_kwargs: dict[str, Any] = {}
    if request_timeout is not None:
        request_kwargs["timeout"] = aiohttp.ClientTimeout(total=request_timeout)
    return AsyncWeb3(AsyncHTTPProvider(provider_url, request_kwargs=request_kwargs))


class Web3WalletProvider:
    """IWalletProvider の web3.py 実装.

    eth_requestAccounts を優先し、ノードが未対応の場合は eth_accounts を使う。
    """

    def __init__(self, w3: AsyncWeb3) -> None:
        self._w3 = w3

    @property
    def web3(self) -> AsyncWeb3:
        return self._w3

    async def request_accounts(self) -> list[str]:
        """アカウントへのアクセスを要求する."""
        response = await self._rpc("eth_requestAccounts")
        error = response.get("error")
        if error:
            code = error.get("code") if isinstance(error, dict) else None
            if code == _METHOD_NOT_FOUND:
                logger.debug("eth_requestAccounts unsupported, using eth_accounts")
                response = await self._rpc("eth_accounts")
                error = response.get("error")
            elif code == _USER_REJECTED:
                raise NoAccountError("ウォレットがアカウントへのアクセスを拒否しました")
        if error:
            raise ProviderUnavailableError(f"アカウント要求エラー: {error}")

        accounts = response.get("result") or []
        return [AsyncWeb3.to_checksum_address(a) for a in accounts]

    async def network_id(self) -> str:
        """net_version を返す."""
        try:
            return str(await self._w3.net.version)
        except (aiohttp.ClientError, OSError, Web3Exception) as e:
            raise ProviderUnavailableError(f"ネットワークIDを取得できません: {e}") from e

    async def close(self) -> None:
        """キャッシュされた HTTP セッションを閉じる."""
        await self._w3.provider.disconnect()

    async def _rpc(self, method: str) -> dict[str, Any]:
        try:
            response = await self._w3.provider.make_request(method, [])
        except (aiohttp.ClientError, OSError, Web3Exception) as e:
            raise ProviderUnavailableError(
                f"ウォレットプロバイダーに接続できません: {e}"
            ) from e
        return dict(response)
