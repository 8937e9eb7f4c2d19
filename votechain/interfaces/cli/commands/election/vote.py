"""投票コマンド."""

import asyncio

import click

from votechain.application.dtos.session_dto import CastVoteInputDto
from votechain.interfaces.cli.base import with_error_handling
from votechain.interfaces.cli.commands.election._session import (
    echo_result,
    open_session,
)


@click.command()
@click.argument("candidate_id", required=False)
@with_error_handling
def vote(candidate_id: str | None):
    """候補者に投票する（1アカウント1票）."""
    asyncio.run(_run_vote(candidate_id))


async def _run_vote(candidate_id: str | None) -> None:
    async with open_session() as coordinator:
        result = await coordinator.cast_vote(
            CastVoteInputDto(candidate_id=candidate_id)
        )
        echo_result(result, "Voted")
