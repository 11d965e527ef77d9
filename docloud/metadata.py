"""Droplet metadata service access.

Every running droplet can read facts about itself from the link-local
metadata service, e.g. ``http://169.254.169.254/metadata/v1/id``.
"""

from __future__ import annotations

import httpx
from loguru import logger

from docloud.exceptions import MetadataUnavailableError

DROPLET_ID_METADATA_URL = "http://169.254.169.254/metadata/v1/id"


def http_get(
    url: str,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> str:
    """GET ``url`` and return the response body as text.

    Args:
        url: Address to fetch.
        client: Client to send the request with. A short-lived one is
            created when omitted.
        timeout: Request timeout in seconds. When None, an injected client
            keeps its own timeout and a short-lived one waits indefinitely.

    Raises:
        MetadataUnavailableError: On transport failure or any status other than 200.
    """
    logger.debug("GET {url}", url=url)
    try:
        if client is not None:
            resp = client.get(url) if timeout is None else client.get(url, timeout=timeout)
        else:
            with httpx.Client(timeout=timeout) as c:
                resp = c.get(url)
    except httpx.HTTPError as e:
        raise MetadataUnavailableError(f"Failed to fetch {url}: {e}") from e

    if resp.status_code != httpx.codes.OK:
        raise MetadataUnavailableError(
            f"Droplet metadata returned non-200 status code: {resp.status_code}"
        )
    return resp.text


def droplet_id(
    url: str = DROPLET_ID_METADATA_URL,
    *,
    client: httpx.Client | None = None,
    timeout: float | None = None,
) -> str:
    """ID of the droplet this process runs on."""
    return http_get(url, client=client, timeout=timeout)


__all__ = ["DROPLET_ID_METADATA_URL", "droplet_id", "http_get"]
