"""選挙期間設定コマンド."""

import asyncio

import click

from votechain.application.dtos.session_dto import ConfigureWindowInputDto
from votechain.interfaces.cli.base import with_error_handling
from votechain.interfaces.cli.commands.election._session import (
    echo_result,
    open_session,
)


@click.command()
@click.argument("starts_at")
@click.argument("ends_at")
@with_error_handling
def configure_window(starts_at: str, ends_at: str):
    """選挙期間を設定する（ISO-8601、タイムゾーン省略時は UTC）.

    例: votechain configure-window 2024-01-01T00:00Z 2024-01-02T00:00Z
    """
    asyncio.run(_run_configure(starts_at, ends_at))


async def _run_configure(starts_at: str, ends_at: str) -> None:
    async with open_session() as coordinator:
        result = await coordinator.configure_window(
            ConfigureWindowInputDto(starts_at=starts_at, ends_at=ends_at)
        )
        echo_result(result, "選挙期間を設定しました")
