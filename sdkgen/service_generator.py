"""Render templates and write the generated SDK.

Takes a normalized spec, builds the context with context_builder and
writes base.ts, typings.d.ts, one file per service and index.ts into
config.sdk_dir.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import jinja2

from .config import GenConfig
from .context_builder import build_context

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

BASE_FILE = "base.ts"
TYPINGS_FILE = "typings.d.ts"
INDEX_FILE = "index.ts"


def _environment(*search_dirs: str | None) -> jinja2.Environment:
    loaders: list[jinja2.BaseLoader] = [
        jinja2.FileSystemLoader(d) for d in search_dirs if d
    ]
    loaders.append(jinja2.FileSystemLoader(str(TEMPLATE_DIR)))
    return jinja2.Environment(
        loader=jinja2.ChoiceLoader(loaders),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


class ServiceGenerator:
    """Emit a TypeScript client for one normalized spec."""

    def __init__(self, config: GenConfig, spec: dict[str, Any]) -> None:
        self.config = config
        self.spec = spec
        self.env = _environment(config.template_path)
        self.interface_env = _environment(config.interface_template_path)

    def _write(self, name: str, content: str) -> str:
        output_path = os.path.join(self.config.sdk_dir, name)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)
        return output_path

    def _render(self, env: jinja2.Environment, template: str, **context: Any) -> str:
        return env.get_template(template).render(**context)

    def gen_file(self) -> list[str]:
        """Write every SDK file and return their paths."""
        context = build_context(self.spec, self.config)
        os.makedirs(self.config.sdk_dir, exist_ok=True)
        written = []

        if not self.config.request_lib:
            written.append(self._write(BASE_FILE, self._render(self.env, "base.ts.j2", **context)))

        written.append(self._write(
            TYPINGS_FILE, self._render(self.interface_env, "typings.d.ts.j2", **context),
        ))

        request_import = self.config.request_lib or "./base"
        for service in context["services"]:
            content = self._render(
                self.env, "service.ts.j2",
                service=service, request_import=request_import, **context,
            )
            written.append(self._write(f"{service['name']}.ts", content))

        written.append(self._write(INDEX_FILE, self._render(self.env, "index.ts.j2", **context)))

        logger.info(
            "Generated %d files (%d functions) in %s",
            len(written), context["function_count"], self.config.sdk_dir,
        )
        return written
