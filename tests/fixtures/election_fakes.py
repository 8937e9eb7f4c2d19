"""テスト用の選挙コントラクト・ウォレットのフェイク."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from votechain.application.services.candidate_registry import CandidateRegistry
from votechain.application.services.election_binding import ElectionBinding
from votechain.application.services.election_schedule import ElectionSchedule
from votechain.application.services.vote_guard import VoteGuard
from votechain.application.services.wallet_session import WalletSession
from votechain.application.usecases.session_coordinator_usecase import (
    SessionCoordinator,
)
from votechain.domain.exceptions import (
    ContractNotDeployedError,
    GasLimitExceededError,
    ReadFailedError,
    TransactionRevertedError,
)


CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"
ACCOUNT_X = "0x90F8bf6A479f320ead074411a4B0e7944Ea8c9C1"
ACCOUNT_Y = "0xFFcf8FDEE72ac11b5c542428B35EEF5769C409f0"
NETWORK_ID = "5777"

JAN_1 = datetime(2024, 1, 1, tzinfo=UTC)
JAN_1_NOON = datetime(2024, 1, 1, 12, tzinfo=UTC)
JAN_2 = datetime(2024, 1, 2, tzinfo=UTC)


class FakeElectionContract:
    """オンチェーン選挙コントラクトのインメモリ版.

    require 条件に反する書き込みは TransactionRevertedError を送出する。
    """

    def __init__(
        self,
        address: str = CONTRACT_ADDRESS,
        now: Callable[[], datetime] = lambda: JAN_1_NOON,
        gas_required: int = 100_000,
    ) -> None:
        self.address = address
        self._now = now
        self.gas_required = gas_required
        self.candidates: list[tuple[str, str, int]] = []
        self.voters: set[str] = set()
        self.starts_at = 0
        self.ends_at = 0
        self.failing_candidate_ids: set[int] = set()
        self.fail_count = False
        self.fail_dates = False
        self.fail_check_vote = False
        self.revert_next_write = False
        self.writes: list[tuple[str, str]] = []
        self.reads: list[str] = []

    # reads

    async def get_count_candidates(self, *, sender: str) -> int:
        self.reads.append("getCountCandidates")
        if self.fail_count:
            raise ReadFailedError("getCountCandidates", "connection reset")
        return len(self.candidates)

    async def get_candidate(
        self, candidate_id: int, *, sender: str
    ) -> tuple[int, str, str, int]:
        self.reads.append(f"getCandidate({candidate_id})")
        if candidate_id in self.failing_candidate_ids:
            raise ReadFailedError("getCandidate", "transient RPC error")
        name, party, votes = self.candidates[candidate_id - 1]
        return candidate_id, name, party, votes

    async def get_dates(self, *, sender: str) -> tuple[int, int]:
        self.reads.append("getDates")
        if self.fail_dates:
            raise ReadFailedError("getDates", "connection reset")
        return self.starts_at, self.ends_at

    async def check_vote(self, *, sender: str) -> bool:
        self.reads.append("checkVote")
        if self.fail_check_vote:
            raise ReadFailedError("checkVote", "connection reset")
        return sender in self.voters

    # writes

    async def add_candidate(
        self, name: str, party: str, *, sender: str, gas: int
    ) -> str:
        self._before_write("addCandidate", sender, gas)
        self.candidates.append((name, party, 0))
        return self._tx_hash()

    async def set_dates(
        self, starts_at: int, ends_at: int, *, sender: str, gas: int
    ) -> str:
        self._before_write("setDates", sender, gas)
        self._require(ends_at > starts_at, "setDates")
        self.starts_at = starts_at
        self.ends_at = ends_at
        return self._tx_hash()

    async def vote(self, candidate_id: int, *, sender: str, gas: int) -> str:
        self._before_write("vote", sender, gas)
        now = int(self._now().timestamp())
        self._require(self.starts_at <= now < self.ends_at, "vote")
        self._require(0 < candidate_id <= len(self.candidates), "vote")
        self._require(sender not in self.voters, "vote")
        name, party, votes = self.candidates[candidate_id - 1]
        self.candidates[candidate_id - 1] = (name, party, votes + 1)
        self.voters.add(sender)
        return self._tx_hash()

    def vote_count(self, candidate_id: int) -> int:
        return self.candidates[candidate_id - 1][2]

    def _before_write(self, operation: str, sender: str, gas: int) -> None:
        if self.gas_required > gas:
            raise GasLimitExceededError(estimated=self.gas_required, limit=gas)
        if self.revert_next_write:
            self.revert_next_write = False
            raise TransactionRevertedError(f"{operation} がリバートされました")
        self.writes.append((operation, sender))

    @staticmethod
    def _require(condition: bool, operation: str) -> None:
        if not condition:
            raise TransactionRevertedError(f"{operation} がリバートされました")

    def _tx_hash(self) -> str:
        return "0x" + f"{len(self.writes):064x}"


class FakeWalletProvider:
    """アカウントを返すだけのウォレットプロバイダー."""

    def __init__(
        self, accounts: list[str] | None = None, network_id: str = NETWORK_ID
    ) -> None:
        self.accounts = [ACCOUNT_X] if accounts is None else accounts
        self._network_id = network_id
        self.request_count = 0
        self.closed = False

    async def request_accounts(self) -> list[str]:
        self.request_count += 1
        return list(self.accounts)

    async def network_id(self) -> str:
        return self._network_id

    async def close(self) -> None:
        self.closed = True


class FakeLocator:
    """ネットワークIDごとのコントラクトを返すロケーター."""

    def __init__(self, deployments: dict[str, FakeElectionContract]) -> None:
        self.deployments = deployments

    async def locate(self, network_id: str) -> FakeElectionContract:
        try:
            return self.deployments[network_id]
        except KeyError as e:
            raise ContractNotDeployedError(
                f"ネットワーク {network_id} にデプロイされていません"
            ) from e


def build_coordinator(
    contract: FakeElectionContract | None = None,
    provider: FakeWalletProvider | None = None,
    now: Callable[[], datetime] = lambda: JAN_1_NOON,
    gas_limit: int = 6654755,
    call_timeout: float | None = 1.0,
    page_size: int = 20,
    listener=None,
) -> SessionCoordinator:
    """フェイクを組み合わせたコーディネーターを作成する."""
    contract = contract or FakeElectionContract(now=now)
    provider = provider or FakeWalletProvider()
    binding = ElectionBinding(
        provider,
        FakeLocator({NETWORK_ID: contract}),
        gas_limit=gas_limit,
        call_timeout=call_timeout,
    )
    return SessionCoordinator(
        wallet=WalletSession(provider, call_timeout=call_timeout),
        binding=binding,
        registry=CandidateRegistry(binding, page_size=page_size),
        schedule=ElectionSchedule(binding),
        guard=VoteGuard(binding),
        now=now,
        listener=listener,
    )
