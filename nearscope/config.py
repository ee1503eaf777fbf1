"""
Network configuration for nearscope.

Network definitions ship with the package in ``networks.json``.
"""
import importlib.resources
import json
import logging
import os
import urllib.parse
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "mainnet"
DEFAULT_FINALITY = "optimistic"
LOCAL_HOSTS = ("localhost", "127.0.0.1")


class NetworkConfig:
    """Lookup of RPC endpoints per network."""

    _networks_cache: Optional[Dict[str, Dict[str, Any]]] = None

    @classmethod
    def load_networks(cls) -> Dict[str, Dict[str, Any]]:
        """
        Load the packaged network table, caching it after the first read.

        Returns:
            Mapping of network name to its configuration
        """
        if cls._networks_cache is not None:
            return cls._networks_cache

        resource = importlib.resources.files("nearscope").joinpath("networks.json")
        with resource.open("r", encoding="utf-8") as f:
            cls._networks_cache = json.load(f)
        logger.debug(f"Loaded {len(cls._networks_cache)} network definitions")
        return cls._networks_cache

    @classmethod
    def get_network(cls, network: str) -> Dict[str, Any]:
        """
        Get the configuration of a single network.

        Args:
            network: Network name (e.g. "mainnet")

        Returns:
            Network configuration dictionary

        Raises:
            ValueError: If the network is unknown
        """
        networks = cls.load_networks()
        if network not in networks:
            available = ", ".join(sorted(networks))
            raise ValueError(f"Unknown network '{network}'. Available networks: {available}")
        return networks[network]

    @classmethod
    def get_rpc_url(
        cls,
        network: str = DEFAULT_NETWORK,
        override: Optional[str] = None,
        archival: bool = False
    ) -> str:
        """
        Resolve the RPC URL for a network.

        Precedence: explicit override, then ``<NETWORK>_RPC_URL`` from the
        environment, then the packaged table.

        Args:
            network: Network name
            override: Explicit URL that wins over everything else
            archival: Use the archival node (needed for old transactions)

        Returns:
            RPC endpoint URL
        """
        if override:
            return override

        env_var = f"{network.upper().replace('-', '_')}_RPC_URL"
        env_url = os.environ.get(env_var)
        if env_url:
            logger.debug(f"Using RPC URL from {env_var}")
            return env_url

        config = cls.get_network(network)
        if archival and config.get("archivalRpc"):
            return config["archivalRpc"]
        return config["rpc"]


def validate_rpc_url(url: str) -> str:
    """
    Check that an RPC URL is safe to use.

    Args:
        url: The endpoint URL

    Returns:
        The URL unchanged

    Raises:
        ValueError: If the URL does not use https and is not a local address
    """
    parsed = urllib.parse.urlparse(url)
    host = parsed.hostname or ""
    if parsed.scheme != "https" and host not in LOCAL_HOSTS:
        raise ValueError(f"rpc_url must use https:// for security (got: {parsed.scheme}://)")
    return url
