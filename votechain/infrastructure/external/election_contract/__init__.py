"""選挙コントラクトのインフラ実装パッケージ."""

from .artifact import ContractArtifact, ContractArtifactLoader
from .contract import Web3ElectionContract
from .locator import ArtifactContractLocator


__all__ = [
    "ArtifactContractLocator",
    "ContractArtifact",
    "ContractArtifactLoader",
    "Web3ElectionContract",
]
