"""Droplet-backed implementation of the orchestrator's Instances contract.

Every call is a fresh request/response cycle against the DigitalOcean API
(or the local metadata service); nothing is cached between calls.
"""

from __future__ import annotations

import re
from typing import override

import httpx
from loguru import logger

from docloud.client import MAX_PER_PAGE, DropletClient
from docloud.exceptions import (
    InstanceNotFoundError,
    InvalidIDError,
    MissingAddressError,
    OperationNotSupportedError,
    UpstreamError,
)
from docloud.logging import teardown_logging
from docloud.metadata import DROPLET_ID_METADATA_URL, droplet_id
from docloud.protocols import Instances
from docloud.types import Droplet, NodeAddress, NodeAddressType

_DROPLET_ID = re.compile(r"[+-]?[0-9]+", re.ASCII)


class DropletInstances(Instances):
    """Resolves node identity and addresses from DigitalOcean droplets.

    Args:
        client: Droplet API client.
        metadata_url: Endpoint returning the current droplet's ID.
        metadata_client: httpx client for metadata requests (optional).
        metadata_timeout: Timeout for metadata requests in seconds (optional).
        per_page: Page size used when scanning droplets by name.
    """

    def __init__(
        self,
        client: DropletClient,
        *,
        metadata_url: str = DROPLET_ID_METADATA_URL,
        metadata_client: httpx.Client | None = None,
        metadata_timeout: float | None = None,
        per_page: int = MAX_PER_PAGE,
    ) -> None:
        self._client = client
        self._metadata_url = metadata_url
        self._metadata_client = metadata_client
        self._metadata_timeout = metadata_timeout
        self._per_page = per_page
        self.log_handler_ids: list[int] = []

    def close(self) -> None:
        """Remove log handlers installed for this resolver."""
        if self.log_handler_ids:
            teardown_logging(self.log_handler_ids)
            self.log_handler_ids = []

    def __enter__(self) -> DropletInstances:
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    # For DigitalOcean only the public and private IPv4 addresses are reported,
    # and only for the droplet we are running on.
    @override
    def node_addresses(self, name: str) -> tuple[NodeAddress, ...]:
        self_id = droplet_id(
            self._metadata_url,
            client=self._metadata_client,
            timeout=self._metadata_timeout,
        )
        return self.node_addresses_by_provider_id(self_id)

    @override
    def node_addresses_by_provider_id(self, provider_id: str) -> tuple[NodeAddress, ...]:
        droplet = self._droplet_by_id(provider_id)

        private_ip = droplet.private_ipv4()
        if not private_ip:
            raise MissingAddressError(droplet.id, "private")

        public_ip = droplet.public_ipv4()
        if not public_ip:
            raise MissingAddressError(droplet.id, "public")

        return (
            NodeAddress(NodeAddressType.HOSTNAME, droplet.name),
            NodeAddress(NodeAddressType.INTERNAL_IP, private_ip),
            NodeAddress(NodeAddressType.EXTERNAL_IP, public_ip),
        )

    @override
    def external_id(self, node_name: str) -> str:
        return self.instance_id(node_name)

    @override
    def instance_id(self, node_name: str) -> str:
        return str(self._droplet_by_name(node_name).id)

    # Droplet types are the size slugs, e.g. "s-2vcpu-4gb".
    @override
    def instance_type(self, node_name: str) -> str:
        return self._droplet_by_name(node_name).size_slug

    @override
    def instance_type_by_provider_id(self, provider_id: str) -> str:
        return self._droplet_by_id(provider_id).size_slug

    @override
    def add_ssh_key_to_all_instances(self, user: str, key_data: bytes) -> None:
        raise OperationNotSupportedError("add_ssh_key_to_all_instances")

    # On DigitalOcean the node name is the droplet's hostname.
    @override
    def current_node_name(self, hostname: str) -> str:
        return hostname

    def _droplet_by_id(self, provider_id: str) -> Droplet:
        # Surrounding whitespace is tolerated; the metadata body may end in a newline.
        if not _DROPLET_ID.fullmatch(provider_id.strip()):
            raise InvalidIDError(provider_id)
        did = int(provider_id)

        resp = self._client.get_droplet(did)
        if not resp.ok:
            raise UpstreamError(
                f"DO API returned non-200 status code: {resp.status}", status=resp.status
            )
        if resp.data is None:
            raise UpstreamError(f"DO API returned no droplet for ID {did}", status=resp.status)

        return Droplet.from_response(resp.data)

    def _droplet_by_name(self, node_name: str) -> Droplet:
        # TODO: list by tag once a node tagging format is settled; the API
        # cannot filter droplets by name, so this scans every page.
        page = 1
        while True:
            resp = self._client.list_droplets(page=page, per_page=self._per_page)
            if not resp.ok:
                raise UpstreamError(
                    f"DO API returned non-200 status code: {resp.status}", status=resp.status
                )

            for data in resp.data["droplets"]:
                if data.get("name") == node_name:
                    return Droplet.from_response(data)

            pages = resp.data.get("links", {}).get("pages", {})
            if not pages.get("next"):
                break
            page += 1

        logger.warning("No droplet named {node_name}", node_name=node_name)
        raise InstanceNotFoundError(node_name)


__all__ = ["DropletInstances"]
