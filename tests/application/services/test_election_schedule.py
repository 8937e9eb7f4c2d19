"""ElectionScheduleのテスト."""

import pytest

from tests.fixtures.election_fakes import (
    ACCOUNT_X,
    JAN_1,
    JAN_2,
    NETWORK_ID,
    FakeElectionContract,
    FakeLocator,
    FakeWalletProvider,
)
from votechain.application.services.election_binding import ElectionBinding
from votechain.application.services.election_schedule import ElectionSchedule
from votechain.domain.exceptions import InvalidWindowError, TransactionRevertedError
from votechain.domain.value_objects.election_window import ElectionWindow
from votechain.domain.value_objects.session import Session


@pytest.fixture
def contract() -> FakeElectionContract:
    return FakeElectionContract()


@pytest.fixture
def session() -> Session:
    return Session(account=ACCOUNT_X)


async def _schedule(contract: FakeElectionContract) -> ElectionSchedule:
    binding = ElectionBinding(FakeWalletProvider(), FakeLocator({NETWORK_ID: contract}))
    await binding.bind()
    return ElectionSchedule(binding)


class TestConfigure:
    """configureメソッドのテスト."""

    @pytest.mark.asyncio
    async def test_configure_writes_unix_seconds(self, contract, session) -> None:
        schedule = await _schedule(contract)

        window = await schedule.configure(
            session, "2024-01-01T00:00Z", "2024-01-02T00:00Z"
        )

        assert window == ElectionWindow(starts_at=JAN_1, ends_at=JAN_2)
        assert (contract.starts_at, contract.ends_at) == (1704067200, 1704153600)
        assert contract.writes == [("setDates", ACCOUNT_X)]

    @pytest.mark.asyncio
    async def test_inverted_window_is_never_written(self, contract, session) -> None:
        schedule = await _schedule(contract)

        with pytest.raises(InvalidWindowError):
            await schedule.configure(session, JAN_2, JAN_1)

        assert contract.writes == []
        assert await schedule.read_window(session) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("starts_at", "ends_at"),
        [
            ("2024-01-01T00:00:00.200Z", "2024-01-01T00:00:00.700Z"),
            ("1960-01-01T00:00Z", "2024-01-02T00:00Z"),
        ],
    )
    async def test_window_unrepresentable_in_unix_seconds_is_never_written(
        self, contract, session, starts_at, ends_at
    ) -> None:
        schedule = await _schedule(contract)

        with pytest.raises(InvalidWindowError):
            await schedule.configure(session, starts_at, ends_at)

        assert contract.writes == []

    @pytest.mark.asyncio
    async def test_reverted_write_leaves_window_unconfigured(
        self, contract, session
    ) -> None:
        schedule = await _schedule(contract)
        contract.revert_next_write = True

        with pytest.raises(TransactionRevertedError):
            await schedule.configure(session, JAN_1, JAN_2)

        assert await schedule.read_window(session) is None

    @pytest.mark.asyncio
    async def test_reconfiguration_overwrites(self, contract, session) -> None:
        schedule = await _schedule(contract)
        await schedule.configure(session, JAN_1, JAN_2)

        await schedule.configure(session, "2024-02-01T00:00Z", "2024-02-03T00:00Z")

        window = await schedule.read_window(session)
        assert window is not None
        assert window.starts_at.month == 2
