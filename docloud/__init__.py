"""docloud: DigitalOcean droplet lookups for cluster orchestrators.

Example:
    from docloud import DigitalOcean

    instances = DigitalOcean().build()  # token from DIGITALOCEAN_TOKEN
    instances.node_addresses_by_provider_id("12345")
"""

from docloud.client import DropletClient
from docloud.config import DigitalOcean, resolve_provider
from docloud.exceptions import (
    ConfigurationError,
    DOCloudError,
    InstanceNotFoundError,
    InvalidIDError,
    MetadataUnavailableError,
    MissingAddressError,
    OperationNotSupportedError,
    UpstreamError,
)
from docloud.instances import DropletInstances
from docloud.logging import LogConfig
from docloud.protocols import Instances
from docloud.types import Droplet, NodeAddress, NodeAddressType

__all__ = [
    "ConfigurationError",
    "DOCloudError",
    "DigitalOcean",
    "Droplet",
    "DropletClient",
    "DropletInstances",
    "InstanceNotFoundError",
    "Instances",
    "InvalidIDError",
    "LogConfig",
    "MetadataUnavailableError",
    "MissingAddressError",
    "NodeAddress",
    "NodeAddressType",
    "OperationNotSupportedError",
    "UpstreamError",
    "resolve_provider",
]
