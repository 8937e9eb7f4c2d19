"""選挙期間と状態を扱うドメインサービス."""

from __future__ import annotations

from datetime import UTC, datetime

from votechain.domain.exceptions import InvalidWindowError
from votechain.domain.value_objects.election_state import ElectionState
from votechain.domain.value_objects.election_window import ElectionWindow


InstantInput = datetime | str | int | float


class ElectionClock:
    """選挙期間の検証と、現在時刻からの状態導出を行うドメインサービス.

    状態は読み取りのたびに導出し直す。列挙値を読み取りを跨いで保持しない。
    """

    def parse_window(
        self, starts_at: InstantInput | None, ends_at: InstantInput | None
    ) -> ElectionWindow:
        """開始・終了時刻を検証して ElectionWindow を生成する.

        コントラクトには UNIX 秒で書き込むため、秒に切り捨てた値で検証し、
        返す期間も秒単位に揃える。

        Args:
            starts_at: 開始時刻（datetime, ISO-8601 文字列, UNIX 秒）
            ends_at: 終了時刻（同上）

        Returns:
            検証済みの ElectionWindow

        Raises:
            InvalidWindowError: 解釈できない値、1970年以前の開始、
                または秒単位で starts_at >= ends_at
        """
        start = self.parse_instant(starts_at, "開始日時")
        end = self.parse_instant(ends_at, "終了日時")
        start_unix, end_unix = int(start.timestamp()), int(end.timestamp())
        if start_unix <= 0:
            raise InvalidWindowError(
                f"開始日時 ({start.isoformat()}) は 1970-01-01 より後である必要があります"
            )
        if start_unix >= end_unix:
            raise InvalidWindowError(
                f"開始日時 ({start.isoformat()}) は終了日時 ({end.isoformat()}) "
                "より秒単位で前である必要があります"
            )
        return ElectionWindow.from_unix(start_unix, end_unix)

    def window_from_contract(self, starts_at: int, ends_at: int) -> ElectionWindow | None:
        """コントラクトの getDates() 応答を ElectionWindow に変換する.

        (0, 0) や開始 >= 終了の値は未設定として扱う。
        """
        if starts_at <= 0 or ends_at <= 0 or starts_at >= ends_at:
            return None
        return ElectionWindow.from_unix(starts_at, ends_at)

    def current_state(
        self, window: ElectionWindow | None, now: datetime
    ) -> ElectionState:
        """指定時刻における選挙状態を返す（純粋関数）."""
        if window is None:
            return ElectionState.UNCONFIGURED
        now = _ensure_aware(now)
        if now < window.starts_at:
            return ElectionState.PENDING
        if now < window.ends_at:
            return ElectionState.OPEN
        return ElectionState.CLOSED

    @staticmethod
    def parse_instant(value: InstantInput | None, label: str = "日時") -> datetime:
        """単一の時刻をタイムゾーン付き datetime に変換する."""
        if value is None or value == "":
            raise InvalidWindowError(f"{label}が指定されていません")
        if isinstance(value, bool):
            raise InvalidWindowError(f"{label}の形式が不正です: {value!r}")
        if isinstance(value, datetime):
            return _ensure_aware(value)
        if isinstance(value, int | float):
            if value <= 0:
                raise InvalidWindowError(f"{label}の形式が不正です: {value!r}")
            try:
                return datetime.fromtimestamp(value, tz=UTC)
            except (OverflowError, OSError, ValueError) as e:
                raise InvalidWindowError(f"{label}の形式が不正です: {value!r}") from e
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _ensure_aware(datetime.fromisoformat(text))
        except ValueError as e:
            raise InvalidWindowError(f"{label}の形式が不正です: {value!r}") from e


def _ensure_aware(value: datetime) -> datetime:
    """naive な datetime は UTC とみなす."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
