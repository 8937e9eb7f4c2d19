"""ウォレットセッションの値オブジェクト."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Session:
    """ウォレットが承認したアカウントとの接続.

    書き込み・読み取りの送信者として、各操作に明示的に渡される。
    """

    account: str
    connected: bool = True
