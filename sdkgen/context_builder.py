"""Build the jinja2 template context from a normalized OpenAPI spec.

Operations are grouped into services by their first tag, each gets a
unique function name within its service, and component schemas become
interfaces for typings.d.ts.
"""

from __future__ import annotations

from typing import Any

from .config import GenConfig
from .loader import get_paths, get_schemas
from .naming import DEFAULT_SERVICE, build_function_name, service_name
from .repair import HTTP_METHODS
from .schema_parser import (
    build_interface,
    get_response_type,
    parse_parameters,
    parse_request_body,
    strip_comment,
)

# Service modules must not clash with the fixed output files or exports
_RESERVED_FILES = {"base", "index", "typings", "request"}


def _service_for(operation: dict[str, Any]) -> str:
    tags = operation.get("tags") or []
    name = service_name(str(tags[0])) if tags else DEFAULT_SERVICE
    if name in _RESERVED_FILES:
        name += "Service"
    return name


def _make_description(method: str, path: str, operation: dict[str, Any]) -> str:
    """Build the JSDoc summary line of a function."""
    summary = operation.get("summary") or ""
    description = operation.get("description") or ""
    if summary:
        doc = summary
    elif description:
        doc = description.split(".")[0]
    else:
        doc = f"{method.upper()} {path}"
    return strip_comment(doc).rstrip(". ")


def _deduplicate_function_names(functions: list[dict[str, Any]]) -> None:
    """Ensure all function names in a service are unique by appending the method, then a counter."""
    seen: dict[str, int] = {}
    for func in functions:
        name = func["name"]
        if name in seen:
            seen[name] += 1
            func["name"] = f"{name}{func['method'].capitalize()}"
        else:
            seen[name] = 1

    final_seen: dict[str, int] = {}
    for func in functions:
        name = func["name"]
        if name in final_seen:
            final_seen[name] += 1
            func["name"] = f"{name}{final_seen[name]}"
        else:
            final_seen[name] = 1


def _param_access(param: dict[str, Any]) -> str:
    key = param["key"]
    return f"params[{key}]" if key.startswith("'") else f"params.{key}"


def _url_template(path: str, params: list[dict[str, Any]]) -> str:
    """Turn '/pets/{petId}' into a JS template literal body."""
    for param in params:
        if param["location"] == "path":
            path = path.replace("{" + param["name"] + "}", "${encodeURIComponent(String(" + param["access"] + "))}")
    return path


def build_context(spec: dict[str, Any], config: GenConfig) -> dict[str, Any]:
    """Build the full template context from the OpenAPI spec."""
    services: dict[str, list[dict[str, Any]]] = {}

    for path, path_item in get_paths(spec).items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue

            params = parse_parameters(spec, operation, path_item)
            for param in params:
                param["access"] = _param_access(param)
            body = parse_request_body(spec, operation)
            func = {
                "name": build_function_name(
                    method, path, operation.get("operationId"), camel_case=config.camel_case,
                ),
                "method": method,
                "path": path,
                "url": _url_template(path, params),
                "params": params,
                "has_required_params": any(p["required"] for p in params),
                "path_params": [p for p in params if p["location"] == "path"],
                "query_params": [p for p in params if p["location"] == "query"],
                "header_params": [p for p in params if p["location"] == "header"],
                "body": body,
                "response_type": get_response_type(spec, operation),
                "description": _make_description(method, path, operation),
                "deprecated": bool(operation.get("deprecated")),
            }
            services.setdefault(_service_for(operation), []).append(func)

    for functions in services.values():
        _deduplicate_function_names(functions)

    interfaces = [
        build_interface(spec, name, schema)
        for name, schema in get_schemas(spec).items()
        if isinstance(schema, dict)
    ]
    info = spec.get("info") or {}
    return {
        "services": [
            {"name": name, "functions": functions}
            for name, functions in sorted(services.items())
        ],
        "interfaces": interfaces,
        "interface_names": [i["name"] for i in interfaces],
        "function_count": sum(len(f) for f in services.values()),
        "title": strip_comment(str(info.get("title", ""))),
        "api_version": str(info.get("version", "unknown")),
        "request_lib": config.request_lib,
        "base_url": config.base_url,
    }
