"""選挙コントラクトのインターフェース."""

from __future__ import annotations

from typing import Protocol


class IElectionContract(Protocol):
    """オンチェーン選挙コントラクトとの境界.

    すべての呼び出しは送信者を明示する。書き込みはガス上限を受け取り、
    見積もりが上限を超える場合は GasLimitExceededError、
    リバート時は TransactionRevertedError を送出する。
    """

    address: str

    async def get_count_candidates(self, *, sender: str) -> int: ...

    async def get_candidate(
        self, candidate_id: int, *, sender: str
    ) -> tuple[int, str, str, int]:
        """(id, name, party, vote_count) を返す."""
        ...

    async def get_dates(self, *, sender: str) -> tuple[int, int]:
        """(開始, 終了) の UNIX 秒を返す. 未設定時は (0, 0)."""
        ...

    async def check_vote(self, *, sender: str) -> bool:
        """sender が投票済みかどうかを返す."""
        ...

    async def add_candidate(
        self, name: str, party: str, *, sender: str, gas: int
    ) -> str:
        """候補者を登録し、トランザクションハッシュを返す."""
        ...

    async def set_dates(
        self, starts_at: int, ends_at: int, *, sender: str, gas: int
    ) -> str:
        """選挙期間を設定し、トランザクションハッシュを返す."""
        ...

    async def vote(self, candidate_id: int, *, sender: str, gas: int) -> str:
        """投票し、トランザクションハッシュを返す."""
        ...


class IElectionContractLocator(Protocol):
    """ネットワークIDからデプロイ済みコントラクトを解決する."""

    async def locate(self, network_id: str) -> IElectionContract:
        """デプロイ済みインスタンスを返す.

        Raises:
            ContractNotDeployedError: 指定ネットワークにインスタンスが存在しない
        """
        ...
