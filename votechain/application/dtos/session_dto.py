"""選挙セッションに関するDTO.

UI 層はここで定義したスナップショットと操作結果だけを受け取って描画する。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from votechain.domain.entities.candidate import Candidate
from votechain.domain.services.election_clock import InstantInput
from votechain.domain.value_objects.candidate_listing import CandidateReadFailure
from votechain.domain.value_objects.election_state import ElectionState
from votechain.domain.value_objects.election_window import ElectionWindow


class SessionPhase(Enum):
    """セッションのライフサイクル."""

    START = "start"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    BOUND = "bound"
    READY = "ready"
    FAILED = "failed"


# =============================================================================
# Snapshot
# =============================================================================


@dataclass(frozen=True)
class CandidateOutputItem:
    """候補者の出力アイテム."""

    id: int
    name: str
    party: str
    vote_count: int

    @classmethod
    def from_entity(cls, entity: Candidate) -> "CandidateOutputItem":
        """エンティティから出力アイテムを生成する."""
        return cls(
            id=entity.id or 0,
            name=entity.name,
            party=entity.party,
            vote_count=entity.vote_count,
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """コーディネーターが公開する状態の全体ビュー.

    読み取りバッチのたびに丸ごと置き換えられる。
    """

    phase: SessionPhase = SessionPhase.START
    account: str | None = None
    contract_address: str | None = None
    state: ElectionState = ElectionState.UNCONFIGURED
    window: ElectionWindow | None = None
    candidates: tuple[CandidateOutputItem, ...] = ()
    candidate_failures: tuple[CandidateReadFailure, ...] = ()
    has_voted: bool | None = None
    vote_latched: bool = False
    read_errors: dict[str, str] = field(default_factory=dict)
    last_error: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.phase is SessionPhase.READY

    @property
    def can_vote(self) -> bool:
        """UI が投票ボタンを有効にしてよいか."""
        return (
            self.is_ready
            and self.state.is_open
            and self.has_voted is False
            and not self.vote_latched
        )

    @property
    def can_register(self) -> bool:
        return self.is_ready and self.state.is_open

    @property
    def total_votes(self) -> int:
        return sum(c.vote_count for c in self.candidates)


# =============================================================================
# Input DTOs
# =============================================================================


@dataclass
class RegisterCandidateInputDto:
    """候補者登録の入力DTO."""

    name: str
    party: str


@dataclass
class ConfigureWindowInputDto:
    """選挙期間設定の入力DTO."""

    starts_at: InstantInput | None
    ends_at: InstantInput | None


@dataclass
class CastVoteInputDto:
    """投票の入力DTO."""

    candidate_id: int | str | None


# =============================================================================
# Output DTOs
# =============================================================================


@dataclass(frozen=True)
class OperationResult:
    """書き込み操作の結果."""

    success: bool
    snapshot: SessionSnapshot
    tx_hash: str | None = None
    error_type: str | None = None
    error_message: str | None = None
