"""Exception hierarchy for docloud.

Every docloud exception inherits from DOCloudError, so callers can catch
all lookup failures with a single except clause.
"""

from __future__ import annotations


class DOCloudError(Exception):
    """Base exception for all docloud errors."""


class ConfigurationError(DOCloudError):
    """Raised for invalid configuration or missing required settings."""


class MetadataUnavailableError(DOCloudError):
    """Raised when the droplet metadata service cannot be read."""


class InvalidIDError(DOCloudError, ValueError):
    """Raised when a provider ID is not a numeric droplet ID."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"Invalid droplet ID {provider_id!r}: not an integer")


class UpstreamError(DOCloudError):
    """Raised when a DigitalOcean API call fails or returns a non-200 status."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class MissingAddressError(DOCloudError):
    """Raised when a droplet lacks a required IPv4 address."""

    def __init__(self, droplet_id: int, kind: str) -> None:
        self.droplet_id = droplet_id
        self.kind = kind
        super().__init__(f"Droplet {droplet_id} has no {kind} IPv4 address")


class InstanceNotFoundError(DOCloudError):
    """Raised when no droplet matches a node name.

    Kept distinct from UpstreamError so the orchestrator can treat it as
    "instance no longer exists" rather than a transient failure.
    """

    def __init__(self, node_name: str) -> None:
        self.node_name = node_name
        super().__init__(f"No droplet named {node_name!r}")


class OperationNotSupportedError(DOCloudError, NotImplementedError):
    """Raised by contract operations that DigitalOcean droplets do not support."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} is not implemented")
