"""Generation job configuration and the sources it can be loaded from.

A source is one of:
- ModuleReference: path to a .py file (exporting ``default`` or ``config``)
  or a .json file; the value may be one config or a list of them
- InlineConfig: a mapping or GenConfig given directly
- InvalidSource: anything else, rejected with ConfigLoadError
"""

from __future__ import annotations

import dataclasses
import importlib.util
import json
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from .errors import ConfigLoadError
from .paths import absolute_path


@dataclass
class GenConfig:
    """One SDK generation job."""

    api: str | None = None
    sdk_dir: str = "sdk"
    interface_template_path: str | None = None
    template_path: str | None = None
    save_openapi_data: bool = False
    auto_clear: bool = True
    ignore_delete: list[str] = field(default_factory=list)
    # Generator options
    request_lib: str | None = None
    base_url: str = ""
    camel_case: bool = True


_FIELDS = {f.name for f in dataclasses.fields(GenConfig)}

# Key spellings used by JavaScript-style config files
_ALIASES: dict[str, str] = {
    "sdkDir": "sdk_dir",
    "interfaceTemplatePath": "interface_template_path",
    "templatePath": "template_path",
    "saveOpenAPIData": "save_openapi_data",
    "autoClear": "auto_clear",
    "ignoreDelete": "ignore_delete",
    "requestLib": "request_lib",
    "baseUrl": "base_url",
    "camelCase": "camel_case",
}


def merge_config(partial: GenConfig | Mapping[str, Any] | None = None) -> GenConfig:
    """Overlay *partial* on the defaults and return a fresh GenConfig."""
    if partial is None:
        return GenConfig()
    if isinstance(partial, GenConfig):
        values = dataclasses.asdict(partial)
    else:
        values = {}
        for key, value in partial.items():
            name = _ALIASES.get(key, key)
            if name not in _FIELDS:
                raise ConfigLoadError(f"unknown config option: {key}")
            values[name] = value
    if values.get("ignore_delete") is None:
        values["ignore_delete"] = []
    values["ignore_delete"] = list(values["ignore_delete"])
    return GenConfig(**values)


def resolve_paths(config: GenConfig) -> GenConfig:
    """Return a copy of *config* with its filesystem paths made absolute."""
    return dataclasses.replace(
        config,
        sdk_dir=absolute_path(config.sdk_dir),
        interface_template_path=absolute_path(config.interface_template_path),
        template_path=absolute_path(config.template_path),
    )


@dataclass(frozen=True)
class ModuleReference:
    path: str


@dataclass(frozen=True)
class InlineConfig:
    value: GenConfig | Mapping[str, Any]


@dataclass(frozen=True)
class InvalidSource:
    value: Any


ConfigSource = Union[ModuleReference, InlineConfig, InvalidSource]


def classify_source(value: Any) -> ConfigSource:
    """Tag a raw config argument with the kind of source it is."""
    if isinstance(value, (str, os.PathLike)):
        return ModuleReference(os.fspath(value))
    if isinstance(value, (GenConfig, Mapping)):
        return InlineConfig(value)
    return InvalidSource(value)


def _load_module_value(path: str) -> Any:
    """Return the configuration value exported by the file at *path*."""
    path = absolute_path(path)
    if path.endswith(".json"):
        try:
            with open(path, encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigLoadError(f"fail load config: {path}: {e}") from e

    module_name = "_sdkgen_config_" + os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(f"fail load config: {path}")
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigLoadError(f"fail load config: {path}: {e}") from e
    for attr in ("default", "config"):
        if hasattr(module, attr):
            return getattr(module, attr)
    raise ConfigLoadError(f"fail load config: {path} exports neither 'default' nor 'config'")


def expand_source(source: ConfigSource) -> list[GenConfig | Mapping[str, Any]]:
    """Flatten one config source into the configurations it holds."""
    if isinstance(source, InlineConfig):
        return [source.value]
    if isinstance(source, ModuleReference):
        value = _load_module_value(source.path)
        values = value if isinstance(value, (list, tuple)) else [value]
        for item in values:
            if not isinstance(item, (GenConfig, Mapping)):
                raise ConfigLoadError(f"fail load config: {item!r} in {source.path}")
        return list(values)
    raise ConfigLoadError(f"fail load config: {source.value!r}")


def load_configs(cfg: Any) -> list[GenConfig]:
    """Turn the argument of gen_sdk into merged, path-resolved configs."""
    raw = cfg if isinstance(cfg, (list, tuple)) else [cfg]
    configs = []
    for item in raw:
        for partial in expand_source(classify_source(item)):
            configs.append(resolve_paths(merge_config(partial)))
    return configs
