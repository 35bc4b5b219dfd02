import importlib
import os
from pathlib import Path
from types import ModuleType
from typing import Optional

import click
import yaml
from ape import networks, project
from ape.contracts import ContractContainer

from pool_deployment.constants import CONSTRUCTOR_PARAMS_DIR, ETHERSCAN_API_KEY_ENVVAR
from pool_deployment.networks import is_local_network


def _load_yaml(filepath: Path) -> dict:
    """Loads a YAML file."""
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def params_filepath_from_environment(environment: str) -> Path:
    p = CONSTRUCTOR_PARAMS_DIR / f"{environment}.yml"
    if not p.exists():
        raise ValueError(f"No constructor parameters found for environment '{environment}'")

    return p


def resolve_params_filepath(environment: Optional[str], params_filepath: Optional[Path]) -> Path:
    """Returns the parameters file selected by exactly one of the two options."""
    if not (bool(params_filepath) ^ bool(environment)):
        raise click.BadOptionUsage(
            option_name="--environment",
            message=(
                f"Provide either 'environment' or 'params_filepath'; "
                f"got {environment}, {params_filepath}"
            ),
        )
    return params_filepath or params_filepath_from_environment(environment=environment)


def _require_plugin(module_name: str, plugin_name: str) -> ModuleType:
    try:
        return importlib.import_module(module_name)
    except ImportError:
        raise ImportError(f"Please install the {plugin_name} plugin to use this script.")


def check_etherscan_plugin() -> None:
    """
    Checks that the ape-etherscan plugin is installed and that
    the explorer API key environment variable is set.
    """
    if is_local_network():
        # unnecessary for local deployment
        return
    _require_plugin("ape_etherscan", "ape-etherscan")
    if not os.environ.get(ETHERSCAN_API_KEY_ENVVAR):
        raise ValueError(f"{ETHERSCAN_API_KEY_ENVVAR} is not set.")


def check_infura_plugin() -> None:
    """Checks the ape-infura plugin and its API key when infura is the active provider."""
    if is_local_network() or networks.provider.name != "infura":
        return
    provider_module = _require_plugin("ape_infura.provider", "ape-infura")
    envvars = provider_module._ENVIRONMENT_VARIABLE_NAMES
    if not any(os.environ.get(envvar) for envvar in envvars):
        raise ValueError(f"No Infura API key found in environment variables: {', '.join(envvars)}")


def get_contract_container(contract: str) -> ContractContainer:
    """Returns the compiled contract container of the ape project."""
    try:
        return getattr(project, contract)
    except AttributeError:
        raise ValueError(f"No contract named '{contract}' compiled in the ape project.")
