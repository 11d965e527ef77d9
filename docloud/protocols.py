"""Protocol for the orchestrator's instance-lookup contract."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from docloud.types import NodeAddress

__all__ = ["Instances"]


@runtime_checkable
class Instances(Protocol):
    """Instance lookups required by the cluster orchestrator.

    The orchestrator calls these to learn node addresses, map node names to
    provider IDs and decide whether a node's backing instance still exists.
    Every method is required, including the ones a provider cannot support;
    those raise OperationNotSupportedError.
    """

    def node_addresses(self, name: str) -> tuple[NodeAddress, ...]:
        """Addresses of the instance this process runs on."""
        ...

    def node_addresses_by_provider_id(self, provider_id: str) -> tuple[NodeAddress, ...]:
        """Addresses of the instance identified by ``provider_id``."""
        ...

    def external_id(self, node_name: str) -> str:
        """Provider ID of the named node.

        Raises InstanceNotFoundError when the instance no longer exists.
        """
        ...

    def instance_id(self, node_name: str) -> str:
        """Provider ID of the named node."""
        ...

    def instance_type(self, node_name: str) -> str:
        """Type of the named node's instance."""
        ...

    def instance_type_by_provider_id(self, provider_id: str) -> str:
        """Type of the instance identified by ``provider_id``."""
        ...

    def add_ssh_key_to_all_instances(self, user: str, key_data: bytes) -> None:
        """Authorize an SSH public key (``<protocol> <blob>``) on every instance."""
        ...

    def current_node_name(self, hostname: str) -> str:
        """Node name of the instance this process runs on."""
        ...
