"""votechain CLI エントリーポイント."""

import click

from votechain.common.logging import setup_logging
from votechain.interfaces.cli.commands.election import (
    configure_window,
    register_candidate,
    status,
    vote,
)


@click.group()
@click.option("--log-level", default=None, help="ログレベル（既定は設定値）")
def cli(log_level: str | None):
    """単一のオンチェーン選挙を操作するクライアント."""
    from votechain.infrastructure.config.settings import get_settings

    settings = get_settings()
    setup_logging(log_level or settings.log_level, json_output=settings.log_json)


cli.add_command(status)
cli.add_command(register_candidate, "register-candidate")
cli.add_command(configure_window, "configure-window")
cli.add_command(vote)


if __name__ == "__main__":
    cli()
