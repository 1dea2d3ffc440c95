"""Exceptions raised by the generation pipeline."""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error sdkgen raises on purpose."""


class ConfigLoadError(GeneratorError):
    """A configuration source could not be turned into a GenConfig."""


class FetchError(GeneratorError):
    """The spec could not be retrieved or was not JSON."""

    def __init__(self, locator: str | None, message: str = "") -> None:
        self.locator = locator
        super().__init__(f"failed to fetch spec {locator!r}" + (f": {message}" if message else ""))


class FormatError(GeneratorError):
    """The spec is not a usable Swagger 2.0 / OpenAPI 3.x document."""

    def __init__(self, source: str | None, reason: str = "") -> None:
        self.source = source
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"invalid spec format for {source!r}{detail}: "
            "only OpenAPI 3.x and Swagger 2.0 are supported"
        )
