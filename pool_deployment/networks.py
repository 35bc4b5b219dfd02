from ape import networks

from pool_deployment.constants import LOCAL_NETWORK_NAME


def is_local_network() -> bool:
    """Returns True if the connected network is a local development chain."""
    return networks.provider.network.name == LOCAL_NETWORK_NAME
