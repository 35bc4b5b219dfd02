from pathlib import Path

import click

from pool_deployment.constants import SUPPORTED_ENVIRONMENTS
from pool_deployment.types import ChecksumAddress

environment_option = click.option(
    "--environment",
    "-e",
    help="Deployment environment; used for obtaining constructor parameters",
    type=click.Choice(SUPPORTED_ENVIRONMENTS),
    required=False,
)

params_filepath_option = click.option(
    "--params-filepath",
    "-f",
    help="Constructor parameters filepath if not using a common environment",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)

account_option = click.option(
    "--account",
    "-a",
    "account_alias",
    help="Alias of the ape account used to sign transactions.",
    type=click.STRING,
    required=False,
)

autosign_option = click.option(
    "--autosign",
    help="Sign transactions without prompting for confirmation.",
    is_flag=True,
    default=False,
)

pool_address_option = click.option(
    "--pool-address",
    "-p",
    help="Address of the deployed pool; defaults to the one in the parameters file.",
    type=ChecksumAddress(),
    required=False,
)
