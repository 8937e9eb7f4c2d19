"""選挙の状態表示コマンド."""

import asyncio

import click

from votechain.interfaces.cli.base import with_error_handling
from votechain.interfaces.cli.commands.election._session import open_session
from votechain.interfaces.presenters.snapshot_presenter import SnapshotPresenter


@click.command()
@with_error_handling
def status():
    """アカウント・選挙期間・候補者と得票数を表示する."""
    asyncio.run(_run_status())


async def _run_status() -> None:
    async with open_session() as coordinator:
        for line in SnapshotPresenter().render(coordinator.snapshot):
            click.echo(line)
