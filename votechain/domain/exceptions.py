"""選挙クライアントの例外階層.

バリデーション系の例外はネットワーク呼び出しの前に送出される。
インフラ層は web3 / httpx の例外をここで定義した型に変換して送出する。
"""

from __future__ import annotations


class ElectionClientError(Exception):
    """選挙クライアントの基底例外."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# =============================================================================
# 接続・バインド
# =============================================================================


class ProviderUnavailableError(ElectionClientError):
    """ウォレットプロバイダーが存在しない、または応答しない."""


class NoAccountError(ElectionClientError):
    """ウォレットがアカウントを返さなかった."""


class ContractNotDeployedError(ElectionClientError):
    """接続中のネットワークに選挙コントラクトがデプロイされていない."""


class ArtifactLoadError(ElectionClientError):
    """コンパイル済みコントラクト成果物を読み込めなかった."""


class SessionNotReadyError(ElectionClientError):
    """セッションが READY に達する前に書き込みが要求された."""


# =============================================================================
# 入力バリデーション（ネットワーク呼び出しなし）
# =============================================================================


class InvalidWindowError(ElectionClientError):
    """選挙期間の指定が不正（解釈不能、または開始 >= 終了）."""


class InvalidCandidateError(ElectionClientError):
    """候補者名または政党名が空."""


class NoSelectionError(ElectionClientError):
    """投票先の候補者が選択されていない."""


# =============================================================================
# コントラクト呼び出し
# =============================================================================


class GasLimitExceededError(ElectionClientError):
    """見積もりガス量がガス上限を超えた."""

    def __init__(self, estimated: int, limit: int) -> None:
        super().__init__(f"見積もりガス量 {estimated} が上限 {limit} を超えています")
        self.estimated = estimated
        self.limit = limit


class TransactionRevertedError(ElectionClientError):
    """コントラクトがトランザクションを拒否した."""

    def __init__(self, message: str, tx_hash: str | None = None) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class AlreadyVotedError(ElectionClientError):
    """このアカウントは既に投票済み."""


class ReadFailedError(ElectionClientError):
    """読み取りに失敗した（項目単位、致命的ではない）."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.reason = message


class ContractCallTimeoutError(ElectionClientError, TimeoutError):
    """外部呼び出しがタイムアウトした."""

    def __init__(self, operation: str, timeout: float) -> None:
        super().__init__(f"{operation} が {timeout:g} 秒以内に完了しませんでした")
        self.operation = operation
        self.timeout = timeout
