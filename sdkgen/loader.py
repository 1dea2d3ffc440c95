"""Retrieve API specs and navigate them.

Specs come from an http(s) URL, a file:// URL or a plain path on disk.
Whatever the source, the body must be JSON text.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import httpx

from .errors import FetchError

logger = logging.getLogger(__name__)


def load_spec(path: str | Path) -> dict[str, Any]:
    """Load a JSON spec from disk."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


async def fetch_text(
    locator: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Return the raw body behind *locator* as a string.

    One attempt only. http(s) requests carry no timeout.
    """
    scheme = urlparse(locator).scheme.lower()
    if scheme in ("http", "https"):
        async with httpx.AsyncClient(transport=transport, timeout=None, follow_redirects=True) as client:
            response = await client.get(locator)
            response.raise_for_status()
            return response.content.decode("utf-8")
    if scheme == "file":
        return await asyncio.to_thread(Path(unquote(urlparse(locator).path)).read_text, encoding="utf-8")
    return await asyncio.to_thread(Path(locator).read_text, encoding="utf-8")


async def fetch_spec(
    locator: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[str, Any]:
    """Fetch *locator* and parse it as JSON, raising FetchError on any failure."""
    try:
        text = await fetch_text(locator, transport=transport)
        return json.loads(text)
    except (httpx.HTTPError, OSError, UnicodeDecodeError, ValueError, TypeError) as e:
        raise FetchError(locator, str(e)) from e


def get_paths(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract paths from the spec."""
    return spec.get("paths") or {}


def get_schemas(spec: dict[str, Any]) -> dict[str, Any]:
    """Extract component schemas from the spec."""
    return (spec.get("components") or {}).get("schemas") or {}


def resolve_ref(spec: dict[str, Any], ref: str) -> dict[str, Any]:
    """Resolve a local $ref pointer in the spec."""
    parts = ref.lstrip("#/").split("/")
    node: Any = spec
    for part in parts:
        node = node[part.replace("~1", "/").replace("~0", "~")]
    return node


def ref_name(ref: str) -> str:
    """Last segment of a $ref, e.g. '#/components/schemas/Pet' -> 'Pet'."""
    return ref.rsplit("/", 1)[-1].replace("~1", "/").replace("~0", "~")
