"""Generate TypeScript client SDKs from Swagger 2.0 / OpenAPI 3.x specs."""

from __future__ import annotations

from .config import GenConfig
from .core import gen_from_data, gen_from_url, gen_sdk, generate
from .errors import ConfigLoadError, FetchError, FormatError, GeneratorError

__all__ = [
    "ConfigLoadError",
    "FetchError",
    "FormatError",
    "GenConfig",
    "GeneratorError",
    "gen_from_data",
    "gen_from_url",
    "gen_sdk",
    "generate",
]
