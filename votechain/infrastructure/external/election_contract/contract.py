"""選挙コントラクトの web3.py 実装."""

from __future__ import annotations

import logging

from typing import Any

import aiohttp

from web3 import AsyncWeb3
from web3.exceptions import ContractLogicError, Web3Exception

from votechain.domain.exceptions import (
    GasLimitExceededError,
    ProviderUnavailableError,
    ReadFailedError,
    TransactionRevertedError,
)


logger = logging.getLogger(__name__)

_TRANSPORT_ERRORS = (aiohttp.ClientError, OSError, Web3Exception)


class Web3ElectionContract:
    """IElectionContract の web3.py 実装.

    書き込みは estimate_gas → transact → レシート待ちの順で行い、
    見積もりがガス上限を超える場合は送信しない。
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        address: str,
        abi: list[dict[str, Any]],
        receipt_timeout: float = 120.0,
    ) -> None:
        self._w3 = w3
        self.address = AsyncWeb3.to_checksum_address(address)
        self._contract = w3.eth.contract(address=self.address, abi=abi)
        self._receipt_timeout = receipt_timeout

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_count_candidates(self, *, sender: str) -> int:
        return int(
            await self._call(
                "getCountCandidates",
                self._contract.functions.getCountCandidates(),
                sender,
            )
        )

    async def get_candidate(
        self, candidate_id: int, *, sender: str
    ) -> tuple[int, str, str, int]:
        result = await self._call(
            "getCandidate",
            self._contract.functions.getCandidate(candidate_id),
            sender,
        )
        candidate_id_, name, party, vote_count = result
        return int(candidate_id_), str(name), str(party), int(vote_count)

    async def get_dates(self, *, sender: str) -> tuple[int, int]:
        starts_at, ends_at = await self._call(
            "getDates", self._contract.functions.getDates(), sender
        )
        return int(starts_at), int(ends_at)

    async def check_vote(self, *, sender: str) -> bool:
        return bool(
            await self._call("checkVote", self._contract.functions.checkVote(), sender)
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def add_candidate(
        self, name: str, party: str, *, sender: str, gas: int
    ) -> str:
        return await self._transact(
            "addCandidate",
            self._contract.functions.addCandidate(name, party),
            sender,
            gas,
        )

    async def set_dates(
        self, starts_at: int, ends_at: int, *, sender: str, gas: int
    ) -> str:
        return await self._transact(
            "setDates",
            self._contract.functions.setDates(starts_at, ends_at),
            sender,
            gas,
        )

    async def vote(self, candidate_id: int, *, sender: str, gas: int) -> str:
        return await self._transact(
            "vote", self._contract.functions.vote(candidate_id), sender, gas
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _call(self, operation: str, fn: Any, sender: str) -> Any:
        try:
            return await fn.call({"from": sender})
        except ContractLogicError as e:
            raise ReadFailedError(operation, f"リバートされました: {e}") from e
        except _TRANSPORT_ERRORS as e:
            raise ReadFailedError(operation, str(e)) from e

    async def _transact(self, operation: str, fn: Any, sender: str, gas: int) -> str:
        try:
            estimated = await fn.estimate_gas({"from": sender})
        except ContractLogicError as e:
            raise TransactionRevertedError(f"{operation} がリバートされました: {e}") from e
        except _TRANSPORT_ERRORS as e:
            raise ProviderUnavailableError(f"{operation} のガス見積もりに失敗: {e}") from e

        if estimated > gas:
            raise GasLimitExceededError(estimated=estimated, limit=gas)

        try:
            tx_hash = await fn.transact({"from": sender, "gas": gas})
            receipt = await self._w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self._receipt_timeout
            )
        except ContractLogicError as e:
            raise TransactionRevertedError(f"{operation} がリバートされました: {e}") from e
        except _TRANSPORT_ERRORS as e:
            raise ProviderUnavailableError(f"{operation} の送信に失敗: {e}") from e

        tx_hex = AsyncWeb3.to_hex(tx_hash)
        if receipt["status"] == 0:
            raise TransactionRevertedError(
                f"{operation} がリバートされました", tx_hash=tx_hex
            )
        logger.debug("%s mined in block %s", operation, receipt["blockNumber"])
        return tx_hex
