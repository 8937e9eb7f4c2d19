"""選挙セッションファクトリー

設定に基づいてウォレットプロバイダー・コントラクトロケーターを組み立て、
SessionCoordinator を提供します。
"""

from __future__ import annotations

import logging

from votechain.application.services.candidate_registry import CandidateRegistry
from votechain.application.services.election_binding import ElectionBinding
from votechain.application.services.election_schedule import ElectionSchedule
from votechain.application.services.vote_guard import VoteGuard
from votechain.application.services.wallet_session import WalletSession
from votechain.application.usecases.session_coordinator_usecase import (
    SessionCoordinator,
    SnapshotListener,
)
from votechain.domain.exceptions import ProviderUnavailableError
from votechain.domain.services.interfaces.election_contract import (
    IElectionContractLocator,
)
from votechain.domain.services.interfaces.wallet_provider import IWalletProvider
from votechain.infrastructure.config.settings import (
    DEV_FALLBACK_PROVIDER_URL,
    Settings,
    get_settings,
)


logger = logging.getLogger(__name__)


class _MissingProvider:
    """プロバイダー不在を表す. どの呼び出しも ProviderUnavailableError になる."""

    async def request_accounts(self) -> list[str]:
        raise ProviderUnavailableError("ウォレットプロバイダーが見つかりません")

    async def network_id(self) -> str:
        raise ProviderUnavailableError("ウォレットプロバイダーが見つかりません")

    async def close(self) -> None:
        return None


class _MissingLocator:
    async def locate(self, network_id: str):
        raise ProviderUnavailableError("ウォレットプロバイダーが見つかりません")


class ElectionSessionFactory:
    """SessionCoordinator のファクトリー."""

    @staticmethod
    def create(
        settings: Settings | None = None,
        listener: SnapshotListener | None = None,
    ) -> SessionCoordinator:
        """設定から web3.py 実装のコーディネーターを作成

        Args:
            settings: 設定（省略時は get_settings()）
            listener: スナップショットの描画コールバック

        Returns:
            SessionCoordinator: 組み立て済みのコーディネーター
        """
        settings = settings or get_settings()
        provider_url = settings.resolve_provider_url()

        provider: IWalletProvider | None = None
        locator: IElectionContractLocator | None = None
        if provider_url is not None:
            if provider_url == DEV_FALLBACK_PROVIDER_URL and not settings.provider_url:
                logger.warning(
                    "No wallet provider configured. Falling back to %s. "
                    "This fallback is for local development only.",
                    provider_url,
                )

            from votechain.infrastructure.external.election_contract import (
                ArtifactContractLocator,
                ContractArtifactLoader,
            )
            from votechain.infrastructure.external.web3_wallet import (
                Web3WalletProvider,
                create_web3,
            )

            w3 = create_web3(provider_url, request_timeout=settings.call_timeout_seconds)
            provider = Web3WalletProvider(w3)
            locator = ArtifactContractLocator(
                w3,
                ContractArtifactLoader(settings.artifact_source),
                receipt_timeout=settings.receipt_timeout_seconds,
            )
        else:
            logger.error("No wallet provider available")

        return ElectionSessionFactory.assemble(
            provider,
            locator,
            settings=settings,
            listener=listener,
        )

    @staticmethod
    def assemble(
        provider: IWalletProvider | None,
        locator: IElectionContractLocator | None,
        settings: Settings | None = None,
        listener: SnapshotListener | None = None,
        **coordinator_kwargs,
    ) -> SessionCoordinator:
        """任意のプロバイダーとロケーターからコーディネーターを組み立てる."""
        settings = settings or get_settings()
        timeout = settings.call_timeout_seconds

        wallet = WalletSession(provider, call_timeout=timeout)
        binding = ElectionBinding(
            provider or _MissingProvider(),
            locator or _MissingLocator(),
            gas_limit=settings.gas_limit,
            call_timeout=timeout,
            transact_timeout=(
                timeout + settings.receipt_timeout_seconds
                if timeout is not None
                else None
            ),
        )
        return SessionCoordinator(
            wallet=wallet,
            binding=binding,
            registry=CandidateRegistry(binding, page_size=settings.candidate_page_size),
            schedule=ElectionSchedule(binding),
            guard=VoteGuard(binding),
            listener=listener,
            **coordinator_kwargs,
        )
