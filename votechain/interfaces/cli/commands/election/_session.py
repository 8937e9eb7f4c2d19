"""CLI コマンド共通: セッションの開始と表示."""

from __future__ import annotations

import sys

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import click

from votechain.application.dtos.session_dto import OperationResult, SessionPhase
from votechain.application.usecases.session_coordinator_usecase import (
    SessionCoordinator,
)
from votechain.interfaces.presenters.snapshot_presenter import SnapshotPresenter


@asynccontextmanager
async def open_session() -> AsyncIterator[SessionCoordinator]:
    """コーディネーターを作成して start() する.

    失敗時は終了コード1で終了する。いずれの場合も抜けるときに接続を閉じる。
    """
    from votechain.interfaces.factories.election_session_factory import (
        ElectionSessionFactory,
    )

    coordinator = ElectionSessionFactory.create()
    try:
        snapshot = await coordinator.start()
        if snapshot.phase is SessionPhase.FAILED:
            click.echo(f"エラー: {snapshot.last_error}", err=True)
            sys.exit(1)
        yield coordinator
    finally:
        await coordinator.close()


def echo_result(result: OperationResult, success_message: str) -> None:
    """操作結果を表示する. 失敗時は終了コード1で終了."""
    presenter = SnapshotPresenter()
    lines = presenter.render_result(result, success_message)
    if not result.success:
        for line in lines:
            click.echo(line, err=True)
        sys.exit(1)
    for line in lines:
        click.echo(line)
