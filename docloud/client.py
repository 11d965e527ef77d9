"""Synchronous DigitalOcean droplet client built on the pydo SDK.

pydo hands back the error body instead of raising for some documented
status codes (``droplets.get`` returns the 404 payload as a dict), so each
call captures the HTTP status through the SDK's ``cls`` response hook and
returns it next to the decoded body.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast

from azure.core.exceptions import AzureError
from loguru import logger
from pydo import Client

from docloud.exceptions import UpstreamError
from docloud.types import DropletListResponse, DropletResponse

MAX_PER_PAGE = 200


@dataclass(frozen=True, slots=True)
class Response[T]:
    status: int
    data: T
    headers: dict[str, str]

    @property
    def ok(self) -> bool:
        return self.status == 200


def _with_status(pipeline_response: Any, deserialized: Any, headers: Any) -> Response[Any]:
    return Response(
        status=pipeline_response.http_response.status_code,
        data=deserialized,
        headers=dict(headers or {}),
    )


class DropletClient:
    """Read-only access to droplets.

    Example:
        client = DropletClient.from_token(token)
        resp = client.get_droplet(12345)
        if resp.ok:
            print(resp.data["name"])
    """

    def __init__(self, client: Client) -> None:
        self._client = client

    @classmethod
    def from_token(cls, token: str) -> DropletClient:
        return cls(Client(token=token))

    def get_droplet(self, droplet_id: int) -> Response[DropletResponse | None]:
        """Fetch a single droplet by ID."""
        logger.debug("GET droplet {droplet_id}", droplet_id=droplet_id)
        try:
            resp = self._client.droplets.get(droplet_id=droplet_id, cls=_with_status)
        except AzureError as e:
            raise UpstreamError(f"Failed to get droplet {droplet_id}: {e}") from e

        body = resp.data or {}
        return Response(
            status=resp.status,
            data=cast(DropletResponse | None, body.get("droplet")),
            headers=resp.headers,
        )

    def list_droplets(
        self, page: int = 1, per_page: int = MAX_PER_PAGE
    ) -> Response[DropletListResponse]:
        """Fetch one page of the account's droplets."""
        logger.debug("LIST droplets page={page} per_page={per_page}", page=page, per_page=per_page)
        try:
            resp = self._client.droplets.list(page=page, per_page=per_page, cls=_with_status)
        except AzureError as e:
            raise UpstreamError(f"Failed to list droplets: {e}") from e

        body = resp.data or {}
        body.setdefault("droplets", [])
        return Response(
            status=resp.status,
            data=cast(DropletListResponse, body),
            headers=resp.headers,
        )


__all__ = ["MAX_PER_PAGE", "DropletClient", "Response"]
