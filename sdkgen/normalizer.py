"""Bring any supported spec to a single OpenAPI 3.x shape.

Swagger 2.0 documents are repaired, converted, re-rooted under their
basePath and repaired again. OpenAPI 3.x documents are only repaired.
Either way the result has to pass validate_openapi before anything
downstream sees it.
"""

from __future__ import annotations

import logging
from typing import Any

from .converter import swagger_to_openapi
from .errors import FormatError
from .repair import fix_openapi, fix_swagger

logger = logging.getLogger(__name__)

SWAGGER_VERSION = "2.0"


def is_swagger(document: dict[str, Any]) -> bool:
    return document.get("swagger") == SWAGGER_VERSION


def prefix_base_path(paths: dict[str, Any], base_path: str | None) -> dict[str, Any]:
    """Return *paths* with every key moved under *base_path*.

    A root or empty base path leaves the map as is.
    """
    if not base_path or base_path == "/":
        return paths
    # "/v1/" + "/users" must give "/v1/users", not "/v1//users"
    prefix = base_path.rstrip("/")
    return {prefix + path: item for path, item in paths.items()}


def convert_swagger_to_openapi(document: dict[str, Any]) -> dict[str, Any]:
    """Repair and convert a Swagger 2.0 document, applying its basePath."""
    fix_swagger(document)
    converted = swagger_to_openapi(document)
    converted["paths"] = prefix_base_path(converted.get("paths") or {}, document.get("basePath"))
    fix_openapi(converted)
    return converted


def validate_openapi(document: Any, source: str | None) -> None:
    """Raise FormatError unless *document* is OpenAPI 3.x with paths and info."""
    if not isinstance(document, dict):
        raise FormatError(source, "document is not an object")
    version = document.get("openapi")
    if not isinstance(version, str) or not version.startswith("3."):
        raise FormatError(source, f"unsupported version {version!r}")
    if not document.get("paths"):
        raise FormatError(source, "missing paths")
    if not document.get("info"):
        raise FormatError(source, "missing info")


def normalize(document: dict[str, Any], source: str | None = None) -> dict[str, Any]:
    """Return the OpenAPI 3.x form of *document*.

    OpenAPI input is repaired and returned as the same object; Swagger input
    yields a new document.
    """
    if is_swagger(document):
        logger.debug("Converting Swagger 2.0 spec from %s", source)
        document = convert_swagger_to_openapi(document)
    else:
        fix_openapi(document)
    validate_openapi(document, source)
    return document
