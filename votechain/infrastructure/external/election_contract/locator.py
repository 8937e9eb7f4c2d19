"""成果物からデプロイ済みコントラクトを解決する."""

from __future__ import annotations

import logging

import aiohttp

from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from votechain.domain.exceptions import (
    ContractNotDeployedError,
    ProviderUnavailableError,
)
from votechain.infrastructure.external.election_contract.artifact import (
    ContractArtifactLoader,
)
from votechain.infrastructure.external.election_contract.contract import (
    Web3ElectionContract,
)


logger = logging.getLogger(__name__)


class ArtifactContractLocator:
    """IElectionContractLocator の実装.

    成果物の networks に接続先ネットワークのアドレスがあり、かつ
    そのアドレスにコードが存在する場合のみデプロイ済みとみなす。
    """

    def __init__(
        self,
        w3: AsyncWeb3,
        loader: ContractArtifactLoader,
        receipt_timeout: float = 120.0,
    ) -> None:
        self._w3 = w3
        self._loader = loader
        self._receipt_timeout = receipt_timeout

    async def locate(self, network_id: str) -> Web3ElectionContract:
        artifact = await self._loader.load()
        address = artifact.address_for(network_id)
        if address is None:
            raise ContractNotDeployedError(
                f"{artifact.contract_name} はネットワーク {network_id} に"
                "デプロイされていません"
            )

        checksum = AsyncWeb3.to_checksum_address(address)
        try:
            code = await self._w3.eth.get_code(checksum)
        except (aiohttp.ClientError, OSError, Web3Exception) as e:
            raise ProviderUnavailableError(f"コードを取得できません: {e}") from e
        if not code:
            raise ContractNotDeployedError(
                f"{checksum} にコントラクトのコードがありません"
            )

        logger.info("Resolved %s at %s", artifact.contract_name, checksum)
        return Web3ElectionContract(
            self._w3, checksum, artifact.abi, receipt_timeout=self._receipt_timeout
        )
