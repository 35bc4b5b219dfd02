#!/usr/bin/python3

import click
from ape.cli import ConnectedProviderCommand, network_option

from pool_deployment.client import ApeChainClient
from pool_deployment.options import (
    account_option,
    autosign_option,
    environment_option,
    params_filepath_option,
)
from pool_deployment.params import PoolParameters
from pool_deployment.procedures import deploy_pool, run_procedure
from pool_deployment.utils import resolve_params_filepath


def _deploy(params_filepath, account_alias, autosign):
    params = PoolParameters.from_yaml(params_filepath)
    client = ApeChainClient.from_alias(account_alias, autosign=autosign)
    return deploy_pool(client, params)


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@environment_option
@params_filepath_option
@account_option
@autosign_option
def cli(network, environment, params_filepath, account_alias, autosign):
    """
    Deploy a MultiSigPool contract.

    ape run deploy_pool --network ethereum:goerli:infura --environment goerli
    """
    params_filepath = resolve_params_filepath(environment, params_filepath)
    outcome = run_procedure(_deploy, params_filepath, account_alias, autosign)
    if outcome.succeeded:
        click.secho(f"(i) Deployment confirmed in block {outcome.value.block_number}", fg="green")
    click.get_current_context().exit(outcome.exit_code)


if __name__ == "__main__":
    cli()
