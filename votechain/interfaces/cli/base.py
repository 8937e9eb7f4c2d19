"""CLI 共通処理."""

from __future__ import annotations

import functools
import sys

from collections.abc import Callable
from typing import Any

import click

from votechain.common.logging import get_logger
from votechain.domain.exceptions import ElectionClientError


logger = get_logger(__name__)


def with_error_handling(f: Callable[..., Any]) -> Callable[..., Any]:
    """コマンドの例外をユーザー向けメッセージに変換する."""

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except click.exceptions.Exit:
            raise
        except click.ClickException:
            raise
        except ElectionClientError as e:
            click.echo(f"エラー: {e.message}", err=True)
            sys.exit(1)
        except KeyboardInterrupt:
            click.echo("\n中断しました", err=True)
            sys.exit(130)
        except Exception as e:
            logger.exception(f"Unexpected error: {e}")
            click.echo(f"予期しないエラー: {e}", err=True)
            sys.exit(1)

    return wrapper
