"""選挙操作 CLI コマンド."""

from votechain.interfaces.cli.commands.election.configure_window import (
    configure_window,
)
from votechain.interfaces.cli.commands.election.register_candidate import (
    register_candidate,
)
from votechain.interfaces.cli.commands.election.status import status
from votechain.interfaces.cli.commands.election.vote import vote


__all__ = ["configure_window", "register_candidate", "status", "vote"]
