from ape import networks

from deployment.constants import LOCAL_BLOCKCHAIN_ENVIRONMENTS


def is_local_network() -> bool:
    """Returns True if the active provider is connected to a local development chain."""
    return networks.provider.network.name in LOCAL_BLOCKCHAIN_ENVIRONMENTS
