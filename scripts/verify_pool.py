import click
from ape.cli import ConnectedProviderCommand, network_option

from pool_deployment.client import ApeChainClient
from pool_deployment.options import (
    account_option,
    environment_option,
    params_filepath_option,
    pool_address_option,
)
from pool_deployment.params import PoolParameters
from pool_deployment.procedures import run_procedure, verify_pool
from pool_deployment.utils import resolve_params_filepath


def _verify(params_filepath, account_alias, pool_address):
    params = PoolParameters.from_yaml(params_filepath)
    client = ApeChainClient.from_alias(account_alias)
    return verify_pool(client, params, pool_address=pool_address)


@click.command(cls=ConnectedProviderCommand)
@network_option(required=True)
@environment_option
@params_filepath_option
@account_option
@pool_address_option
def cli(network, environment, params_filepath, account_alias, pool_address):
    """Verify a deployed MultiSigPool contract."""
    params_filepath = resolve_params_filepath(environment, params_filepath)
    outcome = run_procedure(_verify, params_filepath, account_alias, pool_address)
    if outcome.succeeded:
        click.secho(f"(i) Verification submitted for {outcome.value}", fg="green")
    click.get_current_context().exit(outcome.exit_code)


if __name__ == "__main__":
    cli()
