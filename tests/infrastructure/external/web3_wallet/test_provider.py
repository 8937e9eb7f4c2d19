"""Web3WalletProvider のユニットテスト."""

from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from votechain.domain.exceptions import NoAccountError, ProviderUnavailableError
from votechain.infrastructure.external.web3_wallet.provider import (
    Web3WalletProvider,
    create_web3,
)


LOWER = "0x90f8bf6a479f320ead074411a4b0e7944ea8c9c1"
CHECKSUM = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"


def _make_w3(*responses: object) -> MagicMock:
    w3 = MagicMock()
    w3.provider.make_request = AsyncMock(side_effect=list(responses))
    return w3


class TestRequestAccounts:
    """request_accountsメソッドのテスト."""

    @pytest.mark.asyncio
    async def test_accounts_are_checksummed(self) -> None:
        w3 = _make_w3({"jsonrpc": "2.0", "id": 1, "result": [LOWER]})

        accounts = await Web3WalletProvider(w3).request_accounts()

        assert accounts == [CHECKSUM]
        w3.provider.make_request.assert_awaited_once_with("eth_requestAccounts", [])

    @pytest.mark.asyncio
    async def test_falls_back_to_eth_accounts(self) -> None:
        w3 = _make_w3(
            {"error": {"code": -32601, "message": "Method not found"}},
            {"result": [LOWER]},
        )

        accounts = await Web3WalletProvider(w3).request_accounts()

        assert accounts == [CHECKSUM]
        assert w3.provider.make_request.await_args_list[1].args == ("eth_accounts", [])

    @pytest.mark.asyncio
    async def test_empty_result(self) -> None:
        w3 = _make_w3({"result": []})

        assert await Web3WalletProvider(w3).request_accounts() == []

    @pytest.mark.asyncio
    async def test_user_rejection(self) -> None:
        w3 = _make_w3({"error": {"code": 4001, "message": "User rejected"}})

        with pytest.raises(NoAccountError):
            await Web3WalletProvider(w3).request_accounts()

    @pytest.mark.asyncio
    async def test_other_rpc_error(self) -> None:
        w3 = _make_w3({"error": {"code": -32000, "message": "boom"}})

        with pytest.raises(ProviderUnavailableError):
            await Web3WalletProvider(w3).request_accounts()

    @pytest.mark.asyncio
    async def test_connection_refused(self) -> None:
        w3 = _make_w3(aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(ProviderUnavailableError, match="接続できません"):
            await Web3WalletProvider(w3).request_accounts()


class TestNetworkId:
    @pytest.mark.asyncio
    async def test_network_id(self) -> None:
        async def version() -> str:
            return "5777"

        w3 = MagicMock()
        w3.net.version = version()

        assert await Web3WalletProvider(w3).network_id() == "5777"


class TestClose:
    @pytest.mark.asyncio
    async def test_close_disconnects_http_provider(self) -> None:
        w3 = MagicMock()
        w3.provider.disconnect = AsyncMock()

        await Web3WalletProvider(w3).close()

        w3.provider.disconnect.assert_awaited_once()


class TestCreateWeb3:
    def test_creates_http_provider(self) -> None:
        w3 = create_web3("http://127.0.0.1:8545", request_timeout=5.0)

        assert w3.provider.endpoint_uri == "http://127.0.0.1:8545"
