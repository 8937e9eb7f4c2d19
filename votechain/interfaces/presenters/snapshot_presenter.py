"""スナップショットのプレゼンター.

SessionSnapshot と OperationResult を表示用の行に変換する。
描画先（CLI など）はこの出力をそのまま表示するだけでよい。
"""

from __future__ import annotations

from votechain.application.dtos.session_dto import (
    OperationResult,
    SessionPhase,
    SessionSnapshot,
)
from votechain.domain.value_objects.election_state import ElectionState


_STATE_LABELS: dict[ElectionState, str] = {
    ElectionState.UNCONFIGURED: "未設定",
    ElectionState.PENDING: "開始前",
    ElectionState.OPEN: "投票受付中",
    ElectionState.CLOSED: "終了",
}


class SnapshotPresenter:
    """SessionSnapshot を表示用テキストに変換するプレゼンター."""

    def render(self, snapshot: SessionSnapshot) -> list[str]:
        """スナップショット全体を行のリストに変換する."""
        if snapshot.phase is SessionPhase.FAILED:
            return [f"エラー: {snapshot.last_error or '不明なエラー'}"]
        if snapshot.phase is not SessionPhase.READY:
            return [f"状態: {snapshot.phase.value}"]

        lines = [
            f"Your Account: {snapshot.account}",
            f"Contract: {snapshot.contract_address or '-'}",
            f"選挙期間: {self.format_window(snapshot)}",
            f"状態: {_STATE_LABELS[snapshot.state]}",
            "",
            f"{'ID':>4}  {'候補者':<20} {'政党':<16} {'得票数':>6}",
        ]
        for c in snapshot.candidates:
            lines.append(f"{c.id:>4}  {c.name:<20} {c.party:<16} {c.vote_count:>6}")
        if not snapshot.candidates:
            lines.append("  （候補者はまだ登録されていません）")
        for failure in snapshot.candidate_failures:
            lines.append(f"{failure.candidate_id:>4}  取得失敗: {failure.message}")

        lines.append(f"{'':>4}  {'合計':<20} {'':<16} {snapshot.total_votes:>6}")

        lines.append("")
        lines.append(f"投票済み: {self.format_has_voted(snapshot)}")
        lines.append(f"投票可能: {_yes_no(snapshot.can_vote)}")
        lines.append(f"候補者登録可能: {_yes_no(snapshot.can_register)}")

        for field, message in sorted(snapshot.read_errors.items()):
            lines.append(f"読み取りエラー ({field}): {message}")
        if snapshot.last_error:
            lines.append(f"エラー: {snapshot.last_error}")
        return lines

    def render_result(self, result: OperationResult, success_message: str) -> list[str]:
        """操作結果を行のリストに変換する. 失敗は必ずメッセージを含む."""
        if result.success:
            head = success_message
            if result.tx_hash:
                head = f"{head} (tx: {result.tx_hash})"
            return [head, "", *self.render(result.snapshot)]
        return [f"失敗 [{result.error_type}]: {result.error_message}"]

    @staticmethod
    def format_window(snapshot: SessionSnapshot) -> str:
        if snapshot.window is None:
            if "window" in snapshot.read_errors:
                return "取得失敗"
            return "未設定"
        return (
            f"{snapshot.window.starts_at:%Y-%m-%d %H:%M} - "
            f"{snapshot.window.ends_at:%Y-%m-%d %H:%M} (UTC)"
        )

    @staticmethod
    def format_has_voted(snapshot: SessionSnapshot) -> str:
        if snapshot.has_voted is None:
            return "不明"
        return "はい" if snapshot.has_voted or snapshot.vote_latched else "いいえ"


def _yes_no(value: bool) -> str:
    return "はい" if value else "いいえ"
