import typing
from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, List, NamedTuple, Optional

from ape import accounts, networks
from ape.api import AccountAPI
from ape.cli.choices import select_account
from ape.contracts.base import ContractContainer, ContractInstance
from eth_typing import ChecksumAddress
from eth_utils import to_checksum_address
from ethpm_types.abi import ABIType
from web3.auto import w3

from pool_deployment.confirm import _confirm_resolution
from pool_deployment.networks import is_local_network
from pool_deployment.utils import check_etherscan_plugin, check_infura_plugin, get_contract_container

QUALIFIED_SOURCE_DELIMITER = ":"


class DeploymentRecord(NamedTuple):
    """Represents a single confirmed contract deployment."""

    contract_name: str
    address: ChecksumAddress
    tx_hash: str
    block_number: int
    deployer: str


class ChainClient(ABC):
    """
    Handle on the chain the procedures operate against: signing accounts,
    contract deployment and source verification.
    """

    @property
    @abstractmethod
    def network_choice(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def chain_id(self) -> int:
        raise NotImplementedError

    @property
    @abstractmethod
    def is_local(self) -> bool:
        raise NotImplementedError

    @abstractmethod
    def get_signers(self) -> List[Any]:
        """Returns the available signing accounts; the first one is used."""
        raise NotImplementedError

    @abstractmethod
    def deploy(
        self, contract_name: str, constructor_parameters: OrderedDict, sender: Any
    ) -> DeploymentRecord:
        raise NotImplementedError

    @abstractmethod
    def verify(
        self, address: ChecksumAddress, contract: str, constructor_arguments: List[Any]
    ) -> None:
        raise NotImplementedError


def _validate_constructor_abi_inputs(
    contract_name: str,
    abi_inputs: List[ABIType],
    constructor_arguments: typing.Sequence[Any],
) -> None:
    """Validates positional constructor arguments against the constructor ABI."""
    if len(constructor_arguments) != len(abi_inputs):
        raise ValueError(
            f"Constructor parameters length mismatch - "
            f"{contract_name} ABI requires {len(abi_inputs)}, Got {len(constructor_arguments)}."
        )

    for position, (abi_input, value) in enumerate(zip(abi_inputs, constructor_arguments)):
        if not w3.is_encodable(abi_input.type, value):
            raise ValueError(
                f"{contract_name} constructor param '{abi_input.name}' at position {position} "
                f"has a value '{value}' whose type does not match expected ABI type "
                f"'{abi_input.type}'"
            )


def _split_qualified_source(contract: str) -> typing.Tuple[str, str]:
    """Splits 'path/to/Source.sol:Name' into its source path and contract name."""
    source_path, delimiter, contract_name = contract.rpartition(QUALIFIED_SOURCE_DELIMITER)
    if not delimiter or not source_path or not contract_name:
        raise ValueError(
            f"Contract '{contract}' is not a qualified 'source-file:contract-name' identifier."
        )
    return source_path, contract_name


class ApeChainClient(ChainClient):
    """ChainClient backed by the connected ape provider."""

    def __init__(self, account: Optional[AccountAPI] = None, autosign: bool = False):
        check_infura_plugin()
        if autosign:
            print("WARNING: Autosign is enabled. Transactions will be signed automatically.")
        self._account = account
        self._autosign = autosign

    @classmethod
    def from_alias(cls, alias: Optional[str] = None, autosign: bool = False) -> "ApeChainClient":
        account = accounts.load(alias) if alias else None
        return cls(account=account, autosign=autosign)

    @property
    def network_choice(self) -> str:
        return networks.provider.network_choice

    @property
    def chain_id(self) -> int:
        return networks.provider.chain_id

    @property
    def is_local(self) -> bool:
        return is_local_network()

    def get_signers(self) -> List[AccountAPI]:
        if self._account is None:
            if is_local_network():
                return list(accounts.test_accounts)
            self._account = select_account()
        if self._autosign:
            self._account.set_autosign(True)
        return [self._account]

    def _print_network_info(self) -> None:
        print(
            f"Ecosystem: {networks.provider.network.ecosystem.name}",
            f"Network: {networks.provider.network.name}",
            f"Chain ID: {networks.provider.network.chain_id}",
            f"Gas Price: {networks.provider.gas_price}",
            sep="\n",
        )

    def deploy(
        self, contract_name: str, constructor_parameters: OrderedDict, sender: AccountAPI
    ) -> DeploymentRecord:
        container = get_contract_container(contract_name)
        constructor_arguments = list(constructor_parameters.values())
        _validate_constructor_abi_inputs(
            contract_name=contract_name,
            abi_inputs=container.constructor.abi.inputs,
            constructor_arguments=constructor_arguments,
        )

        self._print_network_info()
        if not self._autosign:
            _confirm_resolution(constructor_parameters, contract_name)

        instance = sender.deploy(container, *constructor_arguments)
        receipt = instance.receipt
        return DeploymentRecord(
            contract_name=contract_name,
            address=to_checksum_address(instance.address),
            tx_hash=receipt.txn_hash,
            block_number=receipt.block_number,
            deployer=sender.address,
        )

    def _get_contract_instance(
        self, address: ChecksumAddress, contract: str
    ) -> typing.Tuple[ContractContainer, ContractInstance]:
        source_path, contract_name = _split_qualified_source(contract)
        container = get_contract_container(contract_name)

        source_id = container.contract_type.source_id
        if source_id and not source_path.endswith(source_id):
            raise ValueError(
                f"Contract {contract_name} is compiled from '{source_id}', not '{source_path}'."
            )

        return container, container.at(address)

    def verify(
        self, address: ChecksumAddress, contract: str, constructor_arguments: List[Any]
    ) -> None:
        check_etherscan_plugin()
        explorer = networks.provider.network.explorer
        if explorer is None:
            raise ValueError(f"No explorer plugin available for {self.network_choice}.")

        container, instance = self._get_contract_instance(address, contract)
        encoded_arguments = container.constructor.encode_input(*constructor_arguments)
        print(f"Constructor arguments (ABI-encoded): {encoded_arguments.hex()}")

        explorer.publish_contract(instance.address)
