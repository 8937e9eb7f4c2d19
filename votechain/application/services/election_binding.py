"""選挙コントラクトへのバインディング."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeVar

from votechain.application.services.timeouts import bounded
from votechain.common.logging import get_logger
from votechain.domain.exceptions import SessionNotReadyError
from votechain.domain.services.interfaces.election_contract import (
    IElectionContract,
    IElectionContractLocator,
)
from votechain.domain.services.interfaces.wallet_provider import IWalletProvider
from votechain.domain.value_objects.election_handle import ElectionHandle
from votechain.domain.value_objects.session import Session


logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_GAS_LIMIT = 6654755


class ElectionBinding:
    """接続中のネットワーク上の選挙コントラクトを解決し、呼び出しを仲介する.

    すべての呼び出しはセッションのアカウントを送信者とし、
    書き込みには固定のガス上限を付与する。
    """

    def __init__(
        self,
        provider: IWalletProvider,
        locator: IElectionContractLocator,
        gas_limit: int = DEFAULT_GAS_LIMIT,
        call_timeout: float | None = None,
        transact_timeout: float | None = None,
    ) -> None:
        """初期化する.

        Args:
            provider: ウォレットプロバイダー
            locator: デプロイ済みコントラクトのロケーター
            gas_limit: 書き込みのガス上限
            call_timeout: 読み取り・バインドのタイムアウト秒数
            transact_timeout: 書き込み（レシート待ちを含む）のタイムアウト秒数。
                未指定時は call_timeout
        """
        self._provider = provider
        self._locator = locator
        self._gas_limit = gas_limit
        self._call_timeout = call_timeout
        self._transact_timeout = (
            transact_timeout if transact_timeout is not None else call_timeout
        )
        self._contract: IElectionContract | None = None
        self._handle: ElectionHandle | None = None

    @property
    def handle(self) -> ElectionHandle | None:
        return self._handle

    @property
    def is_bound(self) -> bool:
        return self._contract is not None

    async def bind(self) -> ElectionHandle:
        """デプロイ済みインスタンスを解決して ElectionHandle を返す.

        一度バインドしたハンドルは以降変更しない。

        Raises:
            ContractNotDeployedError: 接続中のネットワークにインスタンスがない
        """
        if self._handle is not None:
            return self._handle

        network_id = await bounded(
            self._provider.network_id(), self._call_timeout, "net_version"
        )
        contract = await bounded(
            self._locator.locate(network_id), self._call_timeout, "locate contract"
        )
        self._contract = contract
        self._handle = ElectionHandle(
            contract_address=contract.address,
            gas_limit=self._gas_limit,
            network_id=network_id,
        )
        logger.info(
            f"Contract deployed at: {contract.address} (network {network_id})"
        )
        return self._handle

    async def call(
        self,
        session: Session,
        operation: str,
        fn: Callable[[IElectionContract, str], Awaitable[T]],
    ) -> T:
        """読み取り呼び出しを送信者付きで実行する."""
        contract = self._require_contract()
        return await bounded(
            fn(contract, session.account), self._call_timeout, operation
        )

    async def transact(
        self,
        session: Session,
        operation: str,
        fn: Callable[[IElectionContract, str, int], Awaitable[str]],
    ) -> str:
        """書き込みトランザクションを送信者・ガス上限付きで1回だけ実行する."""
        contract = self._require_contract()
        tx_hash = await bounded(
            fn(contract, session.account, self._gas_limit),
            self._transact_timeout,
            operation,
        )
        logger.info(f"{operation} succeeded: {tx_hash}")
        return tx_hash

    def _require_contract(self) -> IElectionContract:
        if self._contract is None:
            raise SessionNotReadyError("選挙コントラクトにバインドされていません")
        return self._contract
