"""外部呼び出しのタイムアウト制御."""

from __future__ import annotations

import asyncio

from collections.abc import Awaitable
from typing import TypeVar

from votechain.domain.exceptions import ContractCallTimeoutError


T = TypeVar("T")


async def bounded(
    awaitable: Awaitable[T], timeout: float | None, operation: str
) -> T:
    """外部呼び出しを timeout 秒で打ち切る.

    timeout が None の場合は無制限に待つ。

    Raises:
        ContractCallTimeoutError: timeout 秒以内に完了しなかった
    """
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except ContractCallTimeoutError:
        raise
    except TimeoutError as e:
        raise ContractCallTimeoutError(operation, timeout or 0.0) from e
