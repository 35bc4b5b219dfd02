from typing import Any, Callable, NamedTuple, Optional

import click
from eth_typing import ChecksumAddress

from pool_deployment.client import ChainClient, DeploymentRecord
from pool_deployment.constants import VERIFY_SCRIPT_NAME
from pool_deployment.params import PoolParameters


class Outcome(NamedTuple):
    """Result of a single procedure run."""

    value: Any = None
    error: Optional[Exception] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


def run_procedure(procedure: Callable, *args, **kwargs) -> Outcome:
    """Runs a procedure, turning any failure into an unsuccessful outcome."""
    try:
        value = procedure(*args, **kwargs)
    except Exception as error:
        click.secho(repr(error), fg="red", err=True)
        return Outcome(error=error)
    return Outcome(value=value)


def check_environment(client: ChainClient, params: PoolParameters) -> None:
    """
    Checks that the parameters were written for the chain the client is connected to.
    Local development chains accept any parameters file.
    """
    if client.is_local or params.chain_id is None:
        return
    if params.chain_id != client.chain_id:
        raise ValueError(
            f"chain_id in params file ({params.chain_id}) does not match "
            f"chain_id of current network ({client.chain_id})."
        )


def resolve_signer(client: ChainClient) -> Any:
    signers = client.get_signers()
    if not signers:
        raise ValueError(f"No signing accounts available on {client.network_choice}.")
    signer = signers[0]
    print(f"signer address: {signer.address}")
    return signer


def verification_command(network_choice: str, address: str, params: PoolParameters) -> str:
    command = f"ape run {VERIFY_SCRIPT_NAME} --network {network_choice} --pool-address {address}"
    if params.path:
        command = f"{command} --params-filepath {params.path}"
    return command


def deploy_pool(client: ChainClient, params: PoolParameters) -> DeploymentRecord:
    """
    Deploys a new pool with the configured constructor parameters.
    Every call submits a new contract-creation transaction.
    """
    check_environment(client, params)
    signer = resolve_signer(client)

    constructor_parameters = params.resolve(deployer=signer.address)
    record = client.deploy(params.contract_name, constructor_parameters, sender=signer)

    print(f"{params.contract_name} deployed to: {record.address}")
    print(verification_command(client.network_choice, record.address, params))
    return record


def verify_pool(
    client: ChainClient, params: PoolParameters, pool_address: Optional[ChecksumAddress] = None
) -> ChecksumAddress:
    """Submits an already deployed pool for source verification."""
    address = pool_address or params.pool_address
    if not address:
        raise ValueError(
            "No pool address provided and none set in the parameters file (deployment.pool)."
        )

    check_environment(client, params)
    signer = resolve_signer(client)

    constructor_arguments = params.constructor_arguments(deployer=signer.address)
    print(f"(i) Verifying {params.source} at {address}...")
    client.verify(address, params.source, constructor_arguments)
    return address
