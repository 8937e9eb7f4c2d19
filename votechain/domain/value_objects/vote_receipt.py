"""投票記録の値オブジェクト."""

from dataclasses import dataclass


@dataclass(frozen=True)
class VoteReceipt:
    """アカウントの投票有無. コントラクトから毎回取得し直す."""

    account: str
    has_voted: bool
