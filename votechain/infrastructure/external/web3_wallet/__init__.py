"""web3.py ベースのウォレットプロバイダー."""

from .provider import Web3WalletProvider, create_web3


__all__ = ["Web3WalletProvider", "create_web3"]
