from __future__ import annotations

from collections.abc import Callable, Sequence
from types import SimpleNamespace
from typing import Any

import httpx
import pytest

from docloud.client import DropletClient
from docloud.types import DropletResponse


def make_droplet(
    droplet_id: int,
    name: str,
    *,
    size_slug: str = "s-1vcpu-1gb",
    private_ip: str | None = "10.0.0.5",
    public_ip: str | None = "203.0.113.9",
) -> DropletResponse:
    v4: list[dict[str, str]] = []
    if public_ip is not None:
        v4.append({"ip_address": public_ip, "netmask": "255.255.240.0", "type": "public"})
    if private_ip is not None:
        v4.append({"ip_address": private_ip, "netmask": "255.255.0.0", "type": "private"})
    return {  # type: ignore[return-value]
        "id": droplet_id,
        "name": name,
        "size_slug": size_slug,
        "status": "active",
        "networks": {"v4": v4, "v6": []},
    }


def _respond(cls: Callable[..., Any] | None, status: int, body: dict[str, Any]) -> Any:
    if cls is None:
        return body
    pipeline_response = SimpleNamespace(http_response=SimpleNamespace(status_code=status))
    return cls(pipeline_response, body, {})


class FakeDroplets:
    """Stands in for ``pydo.Client.droplets``.

    Answers the way pydo does: the decoded body is handed back even for
    a 404, and the status is only visible through the ``cls`` hook.
    """

    def __init__(
        self,
        droplets: Sequence[DropletResponse] = (),
        *,
        status: int = 200,
        error: Exception | None = None,
    ) -> None:
        self.droplets = list(droplets)
        self.status = status
        self.error = error
        self.get_calls: list[int] = []
        self.list_calls: list[tuple[int, int]] = []

    def get(self, droplet_id: int, cls: Callable[..., Any] | None = None, **_: Any) -> Any:
        self.get_calls.append(droplet_id)
        if self.error is not None:
            raise self.error
        if self.status != 200:
            return _respond(cls, self.status, {"id": "error", "message": "failed"})
        for d in self.droplets:
            if d["id"] == droplet_id:
                return _respond(cls, 200, {"droplet": d})
        return _respond(
            cls, 404, {"id": "not_found", "message": "The resource you requested could not be found."}
        )

    def list(
        self,
        page: int = 1,
        per_page: int = 20,
        cls: Callable[..., Any] | None = None,
        **_: Any,
    ) -> Any:
        self.list_calls.append((page, per_page))
        if self.error is not None:
            raise self.error
        if self.status != 200:
            return _respond(cls, self.status, {"id": "error", "message": "failed"})

        start = (page - 1) * per_page
        chunk = self.droplets[start : start + per_page]
        pages: dict[str, str] = {}
        if start + per_page < len(self.droplets):
            pages["next"] = f"https://api.digitalocean.com/v2/droplets?page={page + 1}"
        return _respond(
            cls,
            200,
            {
                "droplets": chunk,
                "links": {"pages": pages},
                "meta": {"total": len(self.droplets)},
            },
        )


class FakePydo:
    def __init__(self, droplets: FakeDroplets) -> None:
        self.droplets = droplets


@pytest.fixture
def node_a() -> DropletResponse:
    return make_droplet(101, "node-a", size_slug="s-2vcpu-4gb")


@pytest.fixture
def fake_droplets(node_a: DropletResponse) -> FakeDroplets:
    return FakeDroplets(
        [
            node_a,
            make_droplet(102, "node-b", private_ip="10.0.0.6", public_ip="203.0.113.10"),
        ]
    )


@pytest.fixture
def droplet_client(fake_droplets: FakeDroplets) -> DropletClient:
    return DropletClient(FakePydo(fake_droplets))  # type: ignore[arg-type]


def metadata_transport(
    body: str = "101", status: int = 200
) -> tuple[httpx.MockTransport, list[httpx.Request]]:
    """Metadata endpoint stub that records the requests it serves."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, text=body)

    return httpx.MockTransport(handler), requests
