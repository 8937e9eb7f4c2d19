"""候補者登録コマンド."""

import asyncio

import click

from votechain.application.dtos.session_dto import RegisterCandidateInputDto
from votechain.interfaces.cli.base import with_error_handling
from votechain.interfaces.cli.commands.election._session import (
    echo_result,
    open_session,
)


@click.command()
@click.argument("name")
@click.argument("party")
@with_error_handling
def register_candidate(name: str, party: str):
    """候補者を登録する."""
    asyncio.run(_run_register(name, party))


async def _run_register(name: str, party: str) -> None:
    async with open_session() as coordinator:
        result = await coordinator.register_candidate(
            RegisterCandidateInputDto(name=name, party=party)
        )
        echo_result(
            result, f"候補者を登録しました: {name.strip()} ({party.strip()})"
        )
