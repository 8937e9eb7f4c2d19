"""ウォレットセッション."""

from __future__ import annotations

from votechain.application.services.timeouts import bounded
from votechain.common.logging import get_logger
from votechain.domain.exceptions import NoAccountError, ProviderUnavailableError
from votechain.domain.services.interfaces.wallet_provider import IWalletProvider
from votechain.domain.value_objects.session import Session


logger = get_logger(__name__)


class WalletSession:
    """ウォレットプロバイダーからアクティブアカウントを取得・保持する."""

    def __init__(
        self,
        provider: IWalletProvider | None,
        call_timeout: float | None = None,
    ) -> None:
        """初期化する.

        Args:
            provider: ウォレットプロバイダー。None はプロバイダー不在を表す
            call_timeout: 外部呼び出しのタイムアウト秒数
        """
        self._provider = provider
        self._call_timeout = call_timeout
        self._session: Session | None = None

    @property
    def provider(self) -> IWalletProvider:
        if self._provider is None:
            raise ProviderUnavailableError("ウォレットプロバイダーが見つかりません")
        return self._provider

    @property
    def session(self) -> Session | None:
        return self._session

    async def connect(self) -> Session:
        """アカウントへのアクセスを要求し、先頭のアカウントを採用する.

        Raises:
            ProviderUnavailableError: プロバイダーが存在しない
            NoAccountError: プロバイダーがアカウントを返さなかった
        """
        provider = self.provider
        accounts = await bounded(
            provider.request_accounts(), self._call_timeout, "eth_requestAccounts"
        )
        if not accounts:
            self._session = None
            raise NoAccountError(
                "アカウントが見つかりません。ウォレットを接続してください"
            )

        self._session = Session(account=accounts[0])
        logger.info(f"Connected account: {self._session.account}")
        return self._session

    def disconnect(self) -> None:
        """セッションを無効化する."""
        if self._session is not None:
            logger.info(f"Disconnected account: {self._session.account}")
        self._session = None

    async def close(self) -> None:
        """セッションを無効化し、プロバイダーの接続を閉じる."""
        self.disconnect()
        if self._provider is not None:
            await self._provider.close()
