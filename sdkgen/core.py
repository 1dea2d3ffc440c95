"""Run generation jobs: fetch, normalize, clear, emit.

Every configuration handed to gen_sdk becomes an independent asyncio task.
A failing job is logged and re-raised, but never cancels its siblings.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any

import httpx

from .config import GenConfig, load_configs, merge_config
from .errors import FormatError
from .loader import fetch_spec
from .normalizer import normalize
from .reconciler import clear_generated
from .service_generator import ServiceGenerator

logger = logging.getLogger(__name__)

ORIGIN_SNAPSHOT = "origin.json"
NORMALIZED_SNAPSHOT = "oas.json"


def _write_snapshot(directory: str, name: str, data: dict[str, Any]) -> None:
    with open(os.path.join(directory, name), "w", encoding="utf-8") as f:
        f.write(json.dumps(data, indent=2, ensure_ascii=False))


async def gen_sdk(cfg: Any, transport: httpx.AsyncBaseTransport | None = None) -> list[list[str]]:
    """Generate an SDK for every configuration in *cfg*.

    *cfg* is a config file path, a mapping/GenConfig, or a list of those.
    Waits for all jobs; raises the first failure once every job is done.
    """
    configs = load_configs(cfg)
    results = await asyncio.gather(
        *(gen_from_url(config, transport=transport) for config in configs),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


async def gen_from_url(
    config: GenConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[str]:
    """Fetch the spec named by config.api and generate from it."""
    try:
        data = await fetch_spec(config.api, transport=transport)
        return await gen_from_data(config, data)
    except Exception:
        logger.exception("SDK generation failed for %s", config.api)
        raise


async def gen_from_data(config: GenConfig | dict[str, Any], data: Any) -> list[str]:
    """Normalize *data* and emit the SDK into config.sdk_dir.

    Returns the paths written by the generator.
    """
    config = merge_config(config)

    if not isinstance(data, dict) or not data.get("paths") or not data.get("info"):
        raise FormatError(config.api, "missing paths or info")

    os.makedirs(config.sdk_dir, exist_ok=True)

    if config.save_openapi_data:
        _write_snapshot(config.sdk_dir, ORIGIN_SNAPSHOT, data)

    data = normalize(data, config.api)

    if config.save_openapi_data:
        _write_snapshot(config.sdk_dir, NORMALIZED_SNAPSHOT, data)

    if config.auto_clear:
        clear_generated(config.sdk_dir, config.ignore_delete, custom_base=bool(config.request_lib))

    generator = ServiceGenerator(config, data)
    return generator.gen_file()


def generate(cfg: Any) -> list[list[str]]:
    """Blocking wrapper around gen_sdk."""
    return asyncio.run(gen_sdk(cfg))
