"""1アカウント1票を守る投票ガード."""

from __future__ import annotations

from votechain.application.services.election_binding import ElectionBinding
from votechain.common.logging import get_logger
from votechain.domain.exceptions import (
    AlreadyVotedError,
    NoSelectionError,
    TransactionRevertedError,
)
from votechain.domain.value_objects.session import Session
from votechain.domain.value_objects.vote_receipt import VoteReceipt


logger = get_logger(__name__)


class VoteGuard:
    """投票の送信前後で二重投票を防ぐ.

    投票済みかどうかの正はコントラクトの記録であり、ローカルのフラグは
    ページ読み込みやリフレッシュを跨いで信用しない。ローカルの判定は
    明らかに失敗するトランザクションを避けるための近道にすぎない。
    """

    def __init__(self, binding: ElectionBinding) -> None:
        self._binding = binding
        self._latched = False

    @property
    def latched(self) -> bool:
        """このセッションで投票に成功済みか."""
        return self._latched

    async def has_voted(self, session: Session) -> VoteReceipt:
        """コントラクトにセッションのアカウントの投票記録を問い合わせる."""
        voted = await self._binding.call(
            session,
            "checkVote",
            lambda contract, sender: contract.check_vote(sender=sender),
        )
        return VoteReceipt(account=session.account, has_voted=bool(voted))

    async def cast_vote(
        self,
        session: Session,
        candidate_id: int | str | None,
        *,
        observed_has_voted: bool | None = None,
    ) -> str:
        """投票を送信する.

        Args:
            session: 送信者となるセッション
            candidate_id: 選択された候補者ID
            observed_has_voted: 直近の読み取りで観測した投票済みフラグ

        Returns:
            トランザクションハッシュ

        Raises:
            NoSelectionError: 候補者が選択されていない（送信しない）
            AlreadyVotedError: 投票済み（ローカル判定、またはリバート後の再確認）
            TransactionRevertedError: その他の理由でリバートされた
        """
        selected = self.parse_selection(candidate_id)

        if self._latched or observed_has_voted:
            raise AlreadyVotedError("このアカウントは既に投票済みです")

        try:
            tx_hash = await self._binding.transact(
                session,
                "vote",
                lambda contract, sender, gas: contract.vote(
                    selected, sender=sender, gas=gas
                ),
            )
        except TransactionRevertedError as e:
            if await self._confirm_voted(session):
                self._latched = True
                raise AlreadyVotedError("このアカウントは既に投票済みです") from e
            raise

        self._latched = True
        logger.info(f"Vote cast successfully: candidate {selected}")
        return tx_hash

    def reset(self) -> None:
        """新しいセッション用にラッチを解除する."""
        self._latched = False

    @staticmethod
    def parse_selection(candidate_id: int | str | None) -> int:
        """選択値を候補者IDに変換する."""
        if candidate_id is None or isinstance(candidate_id, bool):
            raise NoSelectionError("投票する候補者を選択してください")
        if isinstance(candidate_id, str):
            candidate_id = candidate_id.strip()
            if not candidate_id:
                raise NoSelectionError("投票する候補者を選択してください")
            try:
                candidate_id = int(candidate_id)
            except ValueError as e:
                raise NoSelectionError(
                    f"候補者IDが不正です: {candidate_id!r}"
                ) from e
        if candidate_id < 1:
            raise NoSelectionError(f"候補者IDが不正です: {candidate_id!r}")
        return candidate_id

    async def _confirm_voted(self, session: Session) -> bool:
        """リバート理由を分類するため投票記録を読み直す."""
        try:
            receipt = await self.has_voted(session)
        except Exception as e:
            logger.error(f"Error checking vote status after revert: {e}")
            return False
        return receipt.has_voted
