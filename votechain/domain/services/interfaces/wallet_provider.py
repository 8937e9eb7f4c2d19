"""ウォレットプロバイダーのインターフェース."""

from __future__ import annotations

from typing import Protocol


class IWalletProvider(Protocol):
    """ユーザーの鍵を保持し、アカウントの承認を行う外部プロバイダー."""

    async def request_accounts(self) -> list[str]:
        """アカウントへのアクセスを要求し、承認されたアドレスを順序付きで返す."""
        ...

    async def network_id(self) -> str:
        """プロバイダーが接続しているネットワークのIDを返す."""
        ...

    async def close(self) -> None:
        """プロバイダーが保持する接続を閉じる."""
        ...
