"""votechain - 単一のオンチェーン選挙コントラクト向けセッションクライアント."""

__version__ = "0.1.0"
