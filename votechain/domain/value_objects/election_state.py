"""選挙のライフサイクル状態."""

from enum import Enum


class ElectionState(Enum):
    """選挙期間と現在時刻から導出される状態."""

    UNCONFIGURED = "unconfigured"
    PENDING = "pending"
    OPEN = "open"
    CLOSED = "closed"

    @property
    def rank(self) -> int:
        """時間の経過に対する順序（未設定は -1）."""
        return _RANKS[self]

    @property
    def is_open(self) -> bool:
        return self is ElectionState.OPEN


_RANKS: dict[ElectionState, int] = {
    ElectionState.UNCONFIGURED: -1,
    ElectionState.PENDING: 0,
    ElectionState.OPEN: 1,
    ElectionState.CLOSED: 2,
}
