"""DigitalOcean droplet types.

TypedDicts mirror the API payloads as returned by pydo. The frozen
dataclasses are the snapshots the resolver works with.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, NotRequired, TypedDict

type NetworkType = Literal["public", "private"]


# =============================================================================
# API Responses
# =============================================================================


class NetworkV4Response(TypedDict):
    """One IPv4 interface of a droplet."""

    ip_address: str
    netmask: NotRequired[str]
    gateway: NotRequired[str]
    type: NetworkType


class NetworksResponse(TypedDict):
    v4: list[NetworkV4Response]
    v6: NotRequired[list[dict[str, object]]]


class DropletResponse(TypedDict):
    """Droplet as returned by ``droplets.get`` and ``droplets.list``."""

    id: int
    name: str
    size_slug: str
    status: NotRequired[str]
    networks: NetworksResponse
    tags: NotRequired[list[str]]


class PagesResponse(TypedDict, total=False):
    first: str
    prev: str
    next: str
    last: str


class LinksResponse(TypedDict, total=False):
    pages: PagesResponse


class DropletListResponse(TypedDict):
    """One page of ``droplets.list``."""

    droplets: list[DropletResponse]
    links: NotRequired[LinksResponse]
    meta: NotRequired[dict[str, int]]


# =============================================================================
# Snapshots
# =============================================================================


@dataclass(frozen=True, slots=True)
class NetworkV4:
    type: NetworkType
    ip_address: str


@dataclass(frozen=True, slots=True)
class Droplet:
    """Immutable snapshot of a droplet, taken once per lookup."""

    id: int
    name: str
    size_slug: str
    networks: tuple[NetworkV4, ...] = ()

    @classmethod
    def from_response(cls, data: DropletResponse) -> Droplet:
        networks = data.get("networks") or {}
        return cls(
            id=int(data["id"]),
            name=data.get("name", ""),
            size_slug=data.get("size_slug", ""),
            networks=tuple(
                NetworkV4(type=n["type"], ip_address=n.get("ip_address", ""))
                for n in networks.get("v4", [])
                if n.get("type")
            ),
        )

    def _ipv4(self, network_type: NetworkType) -> str:
        for network in self.networks:
            if network.type == network_type:
                return network.ip_address
        return ""

    def private_ipv4(self) -> str:
        """First private IPv4 address, or an empty string."""
        return self._ipv4("private")

    def public_ipv4(self) -> str:
        """First public IPv4 address, or an empty string."""
        return self._ipv4("public")


class NodeAddressType(StrEnum):
    """Node address kinds, named as the orchestrator names them."""

    HOSTNAME = "Hostname"
    INTERNAL_IP = "InternalIP"
    EXTERNAL_IP = "ExternalIP"


@dataclass(frozen=True, slots=True)
class NodeAddress:
    type: NodeAddressType
    address: str


__all__ = [
    "Droplet",
    "DropletListResponse",
    "DropletResponse",
    "NetworkV4",
    "NetworkV4Response",
    "NodeAddress",
    "NodeAddressType",
]
