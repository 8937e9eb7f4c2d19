"""候補者レジストリ."""

from __future__ import annotations

import asyncio

from votechain.application.services.election_binding import ElectionBinding
from votechain.common.logging import get_logger
from votechain.domain.entities.candidate import Candidate
from votechain.domain.exceptions import InvalidCandidateError
from votechain.domain.value_objects.candidate_listing import (
    CandidateListing,
    CandidateReadFailure,
)
from votechain.domain.value_objects.session import Session


logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 20


class CandidateRegistry:
    """コントラクト上の候補者一覧のクライアント側ビュー.

    候補者の ID と順序はコントラクトが決めるため、登録直後にローカルへ
    追記することはせず、常にコントラクトから読み直す。
    """

    def __init__(
        self, binding: ElectionBinding, page_size: int = DEFAULT_PAGE_SIZE
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self._binding = binding
        self._page_size = page_size

    async def register(self, session: Session, name: str, party: str) -> str:
        """候補者を登録する.

        Args:
            session: 送信者となるセッション
            name: 候補者名
            party: 所属政党

        Returns:
            トランザクションハッシュ

        Raises:
            InvalidCandidateError: 前後の空白を除いて空の項目がある（送信しない）
        """
        name = (name or "").strip()
        party = (party or "").strip()
        if not name or not party:
            raise InvalidCandidateError("候補者名と政党名の両方を入力してください")

        tx_hash = await self._binding.transact(
            session,
            "addCandidate",
            lambda contract, sender, gas: contract.add_candidate(
                name, party, sender=sender, gas=gas
            ),
        )
        logger.info(f"Candidate added successfully: {name} ({party})")
        return tx_hash

    async def count(self, session: Session) -> int:
        """登録済み候補者数を取得する."""
        count = await self._binding.call(
            session,
            "getCountCandidates",
            lambda contract, sender: contract.get_count_candidates(sender=sender),
        )
        return int(count)

    async def list(self, session: Session) -> CandidateListing:
        """全候補者を取得する.

        1件の読み取り失敗は failures に記録し、残りの取得は継続する。
        """
        total = await self.count(session)
        return await self.list_page(session, 0, total, total=total)

    async def list_page(
        self,
        session: Session,
        offset: int,
        limit: int,
        total: int | None = None,
    ) -> CandidateListing:
        """offset 番目から最大 limit 件の候補者を取得する.

        page_size 件ずつ並行に読み取る。

        Args:
            session: 送信者となるセッション
            offset: 0始まりの開始位置
            limit: 最大取得件数
            total: 候補者数（未指定時はコントラクトから取得）
        """
        if offset < 0 or limit < 0:
            raise ValueError("offset and limit must be non-negative")
        if total is None:
            total = await self.count(session)

        ids = list(range(offset + 1, min(offset + limit, total) + 1))
        candidates: list[Candidate] = []
        failures: list[CandidateReadFailure] = []

        for start in range(0, len(ids), self._page_size):
            batch = ids[start : start + self._page_size]
            results = await asyncio.gather(
                *(self._fetch(session, candidate_id) for candidate_id in batch),
                return_exceptions=True,
            )
            for candidate_id, result in zip(batch, results, strict=True):
                if isinstance(result, Candidate):
                    candidates.append(result)
                elif isinstance(result, Exception):
                    logger.error(
                        f"Error fetching candidate {candidate_id}: {result}"
                    )
                    failures.append(
                        CandidateReadFailure(
                            candidate_id=candidate_id, message=str(result)
                        )
                    )
                else:
                    raise result

        return CandidateListing(candidates=candidates, failures=failures, total=total)

    async def _fetch(self, session: Session, candidate_id: int) -> Candidate:
        raw = await self._binding.call(
            session,
            f"getCandidate({candidate_id})",
            lambda contract, sender: contract.get_candidate(
                candidate_id, sender=sender
            ),
        )
        returned_id, name, party, vote_count = raw
        return Candidate(
            id=int(returned_id),
            name=str(name),
            party=str(party),
            vote_count=int(vote_count),
        )
