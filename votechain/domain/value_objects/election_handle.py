"""選挙コントラクトへのハンドル."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ElectionHandle:
    """デプロイ済み選挙コントラクトのインスタンスを指すハンドル.

    バインド時に一度だけ生成され、以降は変更されない。
    """

    contract_address: str
    gas_limit: int
    network_id: str | None = None
