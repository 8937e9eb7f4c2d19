"""ElectionSessionFactoryのテスト."""

import pytest

from tests.fixtures.election_fakes import (
    NETWORK_ID,
    FakeElectionContract,
    FakeLocator,
    FakeWalletProvider,
)
from votechain.application.dtos.session_dto import SessionPhase
from votechain.infrastructure.config.settings import Settings
from votechain.infrastructure.external.web3_wallet.provider import (
    Web3WalletProvider,
)
from votechain.interfaces.factories.election_session_factory import (
    ElectionSessionFactory,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in (
        "VOTECHAIN_ENVIRONMENT",
        "VOTECHAIN_PROVIDER_URL",
        "VOTECHAIN_USE_DEV_FALLBACK",
    ):
        monkeypatch.delenv(key, raising=False)


class TestCreate:
    def test_development_uses_local_fallback(self) -> None:
        settings = Settings(_env_file=None, provider_url=None)

        coordinator = ElectionSessionFactory.create(settings)

        provider = coordinator.wallet.provider
        assert isinstance(provider, Web3WalletProvider)
        assert provider.web3.provider.endpoint_uri == "http://127.0.0.1:9545"

    @pytest.mark.asyncio
    async def test_production_without_provider_fails_start(self) -> None:
        settings = Settings(_env_file=None, provider_url=None, environment="production")

        coordinator = ElectionSessionFactory.create(settings)
        snapshot = await coordinator.start()

        assert snapshot.phase is SessionPhase.FAILED
        assert "プロバイダー" in (snapshot.last_error or "")


class TestAssemble:
    @pytest.mark.asyncio
    async def test_assembles_working_coordinator(self) -> None:
        settings = Settings(_env_file=None, gas_limit=400_000, candidate_page_size=5)
        contract = FakeElectionContract()

        coordinator = ElectionSessionFactory.assemble(
            FakeWalletProvider(), FakeLocator({NETWORK_ID: contract}), settings=settings
        )
        snapshot = await coordinator.start()

        assert snapshot.phase is SessionPhase.READY
        assert coordinator.binding.handle is not None
        assert coordinator.binding.handle.gas_limit == 400_000
