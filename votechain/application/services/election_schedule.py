"""選挙期間の読み書き."""

from __future__ import annotations

from votechain.application.services.election_binding import ElectionBinding
from votechain.common.logging import get_logger
from votechain.domain.services.election_clock import ElectionClock, InstantInput
from votechain.domain.value_objects.election_window import ElectionWindow
from votechain.domain.value_objects.session import Session


logger = get_logger(__name__)


class ElectionSchedule:
    """ElectionClock の検証を通した上で、選挙期間をコントラクトに読み書きする."""

    def __init__(
        self, binding: ElectionBinding, clock: ElectionClock | None = None
    ) -> None:
        self._binding = binding
        self._clock = clock or ElectionClock()

    @property
    def clock(self) -> ElectionClock:
        return self._clock

    async def configure(
        self,
        session: Session,
        starts_at: InstantInput | None,
        ends_at: InstantInput | None,
    ) -> ElectionWindow:
        """選挙期間を検証し、setDates を1回だけ送信する.

        ローカルに期間を保持しないため、送信失敗時に楽観的な値は残らない。

        Raises:
            InvalidWindowError: 検証エラー（送信しない）
        """
        window = self._clock.parse_window(starts_at, ends_at)
        start, end = window.to_unix()
        await self._binding.transact(
            session,
            "setDates",
            lambda contract, sender, gas: contract.set_dates(
                start, end, sender=sender, gas=gas
            ),
        )
        logger.info(f"Dates set successfully: {window}")
        return window

    async def read_window(self, session: Session) -> ElectionWindow | None:
        """getDates() を読み取る. 未設定の場合は None."""
        starts_at, ends_at = await self._binding.call(
            session,
            "getDates",
            lambda contract, sender: contract.get_dates(sender=sender),
        )
        return self._clock.window_from_contract(int(starts_at), int(ends_at))
