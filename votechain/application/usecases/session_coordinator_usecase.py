"""選挙セッションコーディネーターのユースケース.

ウォレット接続・コントラクトのバインド・読み取りバッチ・書き込み操作を
まとめ、UI 層にはスナップショットと操作結果だけを返す。
"""

from __future__ import annotations

import asyncio

from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import UTC, datetime

from votechain.application.dtos.session_dto import (
    CandidateOutputItem,
    CastVoteInputDto,
    ConfigureWindowInputDto,
    OperationResult,
    RegisterCandidateInputDto,
    SessionPhase,
    SessionSnapshot,
)
from votechain.application.services.candidate_registry import CandidateRegistry
from votechain.application.services.election_binding import ElectionBinding
from votechain.application.services.election_schedule import ElectionSchedule
from votechain.application.services.vote_guard import VoteGuard
from votechain.application.services.wallet_session import WalletSession
from votechain.common.logging import get_logger
from votechain.domain.exceptions import (
    AlreadyVotedError,
    ElectionClientError,
    ReadFailedError,
    SessionNotReadyError,
)
from votechain.domain.value_objects.candidate_listing import CandidateListing
from votechain.domain.value_objects.election_state import ElectionState
from votechain.domain.value_objects.election_window import ElectionWindow
from votechain.domain.value_objects.session import Session
from votechain.domain.value_objects.vote_receipt import VoteReceipt


logger = get_logger(__name__)

SnapshotListener = Callable[[SessionSnapshot], None]

FIELD_CANDIDATES = "candidates"
FIELD_WINDOW = "window"
FIELD_HAS_VOTED = "has_voted"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SessionCoordinator:
    """選挙セッションのライフサイクルを管理するユースケース.

    START → CONNECTING → CONNECTED → BOUND → READY と遷移し、
    どの段階で失敗しても FAILED になる。FAILED からは start() の再実行で
    やり直せる。自動リトライは行わない。

    書き込み操作はそれぞれ1回だけ試行し、結果をそのまま返す。
    例外はコーディネーターの外に送出しない。
    """

    def __init__(
        self,
        wallet: WalletSession,
        binding: ElectionBinding,
        registry: CandidateRegistry,
        schedule: ElectionSchedule,
        guard: VoteGuard,
        now: Callable[[], datetime] | None = None,
        listener: SnapshotListener | None = None,
    ) -> None:
        """コーディネーターを初期化する.

        Args:
            wallet: ウォレットセッション
            binding: コントラクトバインディング
            registry: 候補者レジストリ
            schedule: 選挙期間の読み書き
            guard: 投票ガード
            now: 現在時刻を返す関数（テスト用に差し替え可能）
            listener: スナップショットを受け取る描画コールバック
        """
        self.wallet = wallet
        self.binding = binding
        self.registry = registry
        self.schedule = schedule
        self.guard = guard
        self._now = now or _utcnow
        self._listener = listener
        self._last_account: str | None = None
        self._snapshot = SessionSnapshot()
        self._write_lock = asyncio.Lock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def snapshot(self) -> SessionSnapshot:
        return self._snapshot

    @property
    def phase(self) -> SessionPhase:
        return self._snapshot.phase

    @property
    def session(self) -> Session | None:
        """アクティブなセッション. 所有者は WalletSession."""
        return self.wallet.session

    def attach(self, listener: SnapshotListener) -> None:
        """描画コールバックを登録し、現在のスナップショットを通知する."""
        self._listener = listener
        self._publish(self._snapshot)

    def detach(self) -> None:
        """描画コールバックを外す. 以降の通知は何もしない."""
        self._listener = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> SessionSnapshot:
        """ウォレット接続からコントラクトのバインド、初回読み取りまでを行う."""
        self._publish(
            SessionSnapshot(
                phase=SessionPhase.CONNECTING,
                contract_address=self._snapshot.contract_address,
            )
        )

        try:
            session = await self.wallet.connect()
        except Exception as e:
            self.wallet.disconnect()
            return self._fail("connect wallet", e)

        if self._last_account != session.account:
            self.guard.reset()
        self._last_account = session.account
        self._publish(
            replace(
                self._snapshot,
                phase=SessionPhase.CONNECTED,
                account=session.account,
            )
        )

        try:
            handle = await self.binding.bind()
        except Exception as e:
            return self._fail("bind contract", e)

        self._publish(
            replace(
                self._snapshot,
                phase=SessionPhase.BOUND,
                contract_address=handle.contract_address,
            )
        )

        snapshot = await self._read_batch(session)
        self._publish(snapshot)
        logger.info(
            f"Session ready: {len(snapshot.candidates)} candidates, "
            f"state={snapshot.state.value}, read_errors={len(snapshot.read_errors)}"
        )
        return snapshot

    async def refresh(self) -> SessionSnapshot:
        """読み取りバッチを再実行し、スナップショットを丸ごと置き換える.

        READY 以外、またはセッションが無効な場合は何もせず現在の
        スナップショットを返す。書き込みとは直列に実行する。
        """
        async with self._write_lock:
            session = self.wallet.session
            if session is None or self.phase is not SessionPhase.READY:
                logger.warning(f"refresh ignored in phase {self.phase.value}")
                return self._snapshot

            snapshot = await self._read_batch(session)
            self._publish(snapshot)
            return snapshot

    def disconnect(self) -> SessionSnapshot:
        """セッションを無効化し、START に戻す.

        以降の書き込みとリフレッシュは start() をやり直すまで受け付けない。
        """
        self.wallet.disconnect()
        snapshot = SessionSnapshot(contract_address=self._snapshot.contract_address)
        self._publish(snapshot)
        return snapshot

    async def close(self) -> None:
        """セッションを無効化し、プロバイダーの接続を閉じる."""
        self.disconnect()
        await self.wallet.close()

    def current_state(self) -> ElectionState:
        """現在時刻で選挙状態を導出し直す."""
        return self.schedule.clock.current_state(self._snapshot.window, self._now())

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def register_candidate(
        self, input_dto: RegisterCandidateInputDto
    ) -> OperationResult:
        """候補者を登録し、成功時は一覧を読み直す."""
        return await self._write(
            "addCandidate",
            lambda session: self.registry.register(
                session, input_dto.name, input_dto.party
            ),
        )

    async def configure_window(
        self, input_dto: ConfigureWindowInputDto
    ) -> OperationResult:
        """選挙期間を設定し、成功時は期間を読み直す."""

        async def action(session: Session) -> str | None:
            await self.schedule.configure(
                session, input_dto.starts_at, input_dto.ends_at
            )
            return None

        return await self._write("setDates", action)

    async def cast_vote(self, input_dto: CastVoteInputDto) -> OperationResult:
        """投票し、成功時は集計を読み直す."""
        if self._snapshot.is_ready and not self.current_state().is_open:
            # 期間外でも送信はする。判定はコントラクトに任せる
            logger.warning(
                f"Voting while election is {self.current_state().value}"
            )

        return await self._write(
            "vote",
            lambda session: self.guard.cast_vote(
                session,
                input_dto.candidate_id,
                observed_has_voted=self._snapshot.has_voted,
            ),
        )

    async def _write(
        self,
        operation: str,
        action: Callable[[Session], Awaitable[str | None]],
    ) -> OperationResult:
        async with self._write_lock:
            session = self.wallet.session
            if session is None:
                return self._operation_failed(
                    operation,
                    SessionNotReadyError("ウォレットが接続されていません"),
                )
            if self.phase is not SessionPhase.READY:
                return self._operation_failed(
                    operation,
                    SessionNotReadyError(
                        f"セッションの準備ができていません ({self.phase.value})"
                    ),
                )

            try:
                tx_hash = await action(session)
            except Exception as e:
                return self._operation_failed(operation, e)

            snapshot = await self._read_batch(session)
            self._publish(snapshot)
            return OperationResult(success=True, snapshot=snapshot, tx_hash=tx_hash)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def _read_batch(self, session: Session) -> SessionSnapshot:
        """候補者・期間・投票記録を互いに独立して読み取る.

        個々の失敗は read_errors に記録し、READY への到達は妨げない。
        """
        listing, window, receipt = await asyncio.gather(
            self.registry.list(session),
            self.schedule.read_window(session),
            self.guard.has_voted(session),
            return_exceptions=True,
        )

        read_errors: dict[str, str] = {}

        candidates: tuple[CandidateOutputItem, ...] = ()
        candidate_failures = ()
        if isinstance(listing, CandidateListing):
            candidates = tuple(
                CandidateOutputItem.from_entity(c) for c in listing.candidates
            )
            candidate_failures = tuple(listing.failures)
        else:
            read_errors[FIELD_CANDIDATES] = self._read_failed(FIELD_CANDIDATES, listing)

        election_window: ElectionWindow | None = None
        if isinstance(window, ElectionWindow) or window is None:
            election_window = window
        else:
            read_errors[FIELD_WINDOW] = self._read_failed(FIELD_WINDOW, window)

        has_voted: bool | None = None
        if isinstance(receipt, VoteReceipt):
            has_voted = receipt.has_voted
        else:
            read_errors[FIELD_HAS_VOTED] = self._read_failed(FIELD_HAS_VOTED, receipt)

        return SessionSnapshot(
            phase=SessionPhase.READY,
            account=session.account,
            contract_address=self._snapshot.contract_address,
            state=self.schedule.clock.current_state(election_window, self._now()),
            window=election_window,
            candidates=candidates,
            candidate_failures=candidate_failures,
            has_voted=has_voted,
            vote_latched=self.guard.latched,
            read_errors=read_errors,
        )

    @staticmethod
    def _read_failed(field: str, error: BaseException) -> str:
        if isinstance(error, Exception):
            failure = ReadFailedError(field, _describe(error))
            logger.error(f"Error reading {field}: {failure.reason}")
            return failure.message
        raise error

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------

    def _fail(self, operation: str, error: Exception) -> SessionSnapshot:
        """開始処理の失敗を FAILED として公開する."""
        self._log_error(operation, error)
        snapshot = replace(
            self._snapshot,
            phase=SessionPhase.FAILED,
            last_error=_describe(error),
        )
        self._publish(snapshot)
        return snapshot

    def _operation_failed(self, operation: str, error: Exception) -> OperationResult:
        """書き込みの失敗を記録する. フェーズは変えない."""
        self._log_error(operation, error)
        snapshot = replace(self._snapshot, last_error=_describe(error))
        if isinstance(error, AlreadyVotedError):
            snapshot = replace(
                snapshot, has_voted=True, vote_latched=self.guard.latched
            )
        self._publish(snapshot)
        return OperationResult(
            success=False,
            snapshot=snapshot,
            error_type=type(error).__name__,
            error_message=_describe(error),
        )

    @staticmethod
    def _log_error(operation: str, error: Exception) -> None:
        if isinstance(error, ElectionClientError):
            logger.error(f"Error in {operation}: {error}")
        else:
            logger.exception(f"Unexpected error in {operation}: {error}")

    def _publish(self, snapshot: SessionSnapshot) -> None:
        self._snapshot = snapshot
        listener = self._listener
        if listener is None:
            return
        try:
            listener(snapshot)
        except Exception as e:
            logger.error(f"Snapshot listener failed: {e}")


def _describe(error: BaseException) -> str:
    if isinstance(error, ElectionClientError):
        return error.message
    return str(error) or type(error).__name__
