"""Deployer capability interface for contract-sequencer library."""

from typing import Any, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class DeployerCapability(Protocol):
    """
    Anything that can put a compiled contract on-chain.

    Locating the artifact, signing, broadcasting and waiting for the receipt
    are all the deployer's business.
    """

    def deploy(self, contract_name: str, args: List[Any], value: Optional[int] = None) -> str:
        """
        Deploy a contract.

        Args:
            contract_name: Contract to deploy, e.g. "AzbitToken"
            args: Resolved constructor arguments
            value: Wei to send with the creation transaction, if any

        Returns:
            Address of the new contract

        Raises:
            DeployError: If the deployment fails
        """
        ...
