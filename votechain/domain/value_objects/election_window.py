"""選挙期間の値オブジェクト."""

from dataclasses import dataclass
from datetime import UTC, datetime


@dataclass(frozen=True)
class ElectionWindow:
    """開始・終了時刻で表される選挙期間.

    生成は ElectionClock.parse_window を通すため starts_at < ends_at が保証される。
    """

    starts_at: datetime
    ends_at: datetime

    @classmethod
    def from_unix(cls, starts_at: int, ends_at: int) -> "ElectionWindow":
        """UNIX秒から生成する."""
        return cls(
            starts_at=datetime.fromtimestamp(starts_at, tz=UTC),
            ends_at=datetime.fromtimestamp(ends_at, tz=UTC),
        )

    def to_unix(self) -> tuple[int, int]:
        """コントラクトに渡す UNIX 秒のペアに変換する."""
        return int(self.starts_at.timestamp()), int(self.ends_at.timestamp())

    def __str__(self) -> str:
        return f"{self.starts_at.isoformat()} - {self.ends_at.isoformat()}"
