"""候補者一覧取得結果の値オブジェクト."""

from dataclasses import dataclass, field

from votechain.domain.entities.candidate import Candidate


@dataclass(frozen=True)
class CandidateReadFailure:
    """単一候補者の読み取り失敗."""

    candidate_id: int
    message: str


@dataclass(frozen=True)
class CandidateListing:
    """候補者一覧. 一部の読み取り失敗は failures に記録され、残りは candidates に残る."""

    candidates: list[Candidate] = field(default_factory=list)
    failures: list[CandidateReadFailure] = field(default_factory=list)
    total: int = 0

    @property
    def is_complete(self) -> bool:
        return not self.failures
