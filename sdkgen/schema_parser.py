"""Map OpenAPI schemas and operations to TypeScript shapes.

Handles:
- Primitive, array and map types
- $ref -> interface names
- allOf (intersection), oneOf/anyOf (union)
- Enums as string/number literal unions
- nullable
- Path, query and header parameters
- JSON, form and multipart request bodies
"""

from __future__ import annotations

import json
import re
from typing import Any

from .loader import ref_name, resolve_ref
from .naming import property_key, type_name

_JSON_MEDIA = ("application/json", "text/json", "*/*")
_FORM_MEDIA = ("application/x-www-form-urlencoded", "multipart/form-data")

_PRIMITIVES: dict[str, str] = {
    "string": "string",
    "integer": "number",
    "number": "number",
    "boolean": "boolean",
}


def strip_comment(text: str) -> str:
    """Collapse whitespace and keep */ out of JSDoc blocks."""
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text.replace("*/", "*\\/")


def _literal(value: Any) -> str:
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    return json.dumps(value)


def _wrap(ts_type: str) -> str:
    """Parenthesize unions/intersections before appending [] to them."""
    if " | " in ts_type or " & " in ts_type:
        return f"({ts_type})"
    return ts_type


def resolve_schema_type(spec: dict[str, Any], schema: Any) -> str:
    """Resolve an OpenAPI schema to a TypeScript type string."""
    if not isinstance(schema, dict) or not schema:
        return "any"

    if "$ref" in schema:
        ts_type = type_name(ref_name(schema["$ref"]))
    elif "allOf" in schema:
        parts = [resolve_schema_type(spec, sub) for sub in schema["allOf"]]
        parts = [p for p in parts if p != "any"] or ["any"]
        ts_type = " & ".join(dict.fromkeys(parts))
    elif "oneOf" in schema or "anyOf" in schema:
        subs = schema.get("oneOf") or schema.get("anyOf") or []
        parts = [resolve_schema_type(spec, sub) for sub in subs]
        ts_type = " | ".join(dict.fromkeys(parts)) or "any"
    elif "enum" in schema:
        ts_type = " | ".join(_literal(v) for v in schema["enum"] if v is not None) or "any"
    else:
        schema_type = schema.get("type")
        if schema_type in _PRIMITIVES:
            if schema.get("format") == "binary":
                ts_type = "Blob"
            else:
                ts_type = _PRIMITIVES[schema_type]
        elif schema_type == "array":
            ts_type = _wrap(resolve_schema_type(spec, schema.get("items"))) + "[]"
        elif schema_type == "object" or "properties" in schema:
            ts_type = _inline_object(spec, schema)
        else:
            ts_type = "any"

    if schema.get("nullable") and ts_type != "any":
        ts_type = f"{ts_type} | null"
    return ts_type


def _inline_object(spec: dict[str, Any], schema: dict[str, Any]) -> str:
    properties = schema.get("properties") or {}
    additional = schema.get("additionalProperties")
    if not properties:
        if isinstance(additional, dict) and additional:
            return f"Record<string, {resolve_schema_type(spec, additional)}>"
        return "Record<string, any>"
    required = set(schema.get("required") or [])
    fields = [
        f"{property_key(name)}{'' if name in required else '?'}: {resolve_schema_type(spec, sub)}"
        for name, sub in properties.items()
    ]
    return "{ " + "; ".join(fields) + " }"


def build_interface(spec: dict[str, Any], name: str, schema: dict[str, Any]) -> dict[str, Any]:
    """Describe one component schema as an interface or a type alias."""
    ts_name = type_name(name)
    description = strip_comment(schema.get("description", "") or "")

    is_object = (
        schema.get("type") == "object" or "properties" in schema
    ) and "allOf" not in schema and "enum" not in schema
    if not is_object or not schema.get("properties"):
        return {
            "name": ts_name,
            "kind": "alias",
            "type": resolve_schema_type(spec, schema),
            "extends": None,
            "description": description,
            "properties": [],
        }

    required = set(schema.get("required") or [])
    properties = []
    for prop_name, prop_schema in schema["properties"].items():
        prop_schema = prop_schema if isinstance(prop_schema, dict) else {}
        properties.append({
            "name": property_key(prop_name),
            "type": resolve_schema_type(spec, prop_schema),
            "required": prop_name in required,
            "read_only": bool(prop_schema.get("readOnly")),
            "description": strip_comment(prop_schema.get("description", "") or ""),
        })
    extends = None
    additional = schema.get("additionalProperties")
    if isinstance(additional, dict) and additional:
        extends = f"Record<string, {resolve_schema_type(spec, additional)}>"
    return {
        "name": ts_name,
        "kind": "interface",
        "type": None,
        "extends": extends,
        "description": description,
        "properties": properties,
    }


def _resolve(spec: dict[str, Any], node: Any) -> dict[str, Any]:
    if isinstance(node, dict) and "$ref" in node:
        try:
            return resolve_ref(spec, node["$ref"])
        except (KeyError, TypeError):
            return {}
    return node if isinstance(node, dict) else {}


def parse_parameters(
    spec: dict[str, Any],
    operation: dict[str, Any],
    path_item: dict[str, Any] | None = None,
) -> list[dict[str, Any]]:
    """Collect every parameter of an operation, path-level ones first.

    Operation parameters override path-level ones with the same name and
    location.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in list((path_item or {}).get("parameters") or []) + list(operation.get("parameters") or []):
        param = _resolve(spec, raw)
        if "name" not in param:
            continue
        merged[(param["name"], param.get("in", "query"))] = param

    params: list[dict[str, Any]] = []
    for (name, location), param in merged.items():
        if location == "cookie":
            continue
        schema = param.get("schema")
        if schema is None:
            content = param.get("content") or {}
            schema = next((m.get("schema") for m in content.values() if isinstance(m, dict)), {})
        is_required = bool(param.get("required")) or location == "path"
        params.append({
            "name": name,
            "key": property_key(name),
            "type": resolve_schema_type(spec, schema),
            "required": is_required,
            "description": strip_comment(param.get("description", "") or ""),
            "location": location,
        })
    # Required parameters first, keeping spec order otherwise
    params.sort(key=lambda p: not p["required"])
    return params


def parse_request_body(spec: dict[str, Any], operation: dict[str, Any]) -> dict[str, Any] | None:
    """Describe the request body: its TS type, media type and whether it is required."""
    body = _resolve(spec, operation.get("requestBody"))
    content = body.get("content") or {}
    if not content:
        return None
    for media in _JSON_MEDIA + _FORM_MEDIA:
        if media in content:
            break
    else:
        media = next(iter(content))
    schema = (content[media] or {}).get("schema")
    return {
        "type": resolve_schema_type(spec, schema),
        "media_type": media,
        "is_form": media in _FORM_MEDIA,
        "required": bool(body.get("required")),
        "description": strip_comment(body.get("description", "") or ""),
    }


def get_response_type(spec: dict[str, Any], operation: dict[str, Any]) -> str:
    """Determine the TS type of the success response."""
    responses = operation.get("responses") or {}
    success = None
    for code in ("200", "201", "202", "default"):
        if code in responses:
            success = responses[code]
            break
    if success is None:
        success = next((r for c, r in responses.items() if str(c).startswith("2")), None)
    if success is None:
        return "any"
    content = _resolve(spec, success).get("content") or {}
    if not content:
        return "void"
    for ct in _JSON_MEDIA + ("text/plain",):
        if ct in content:
            return resolve_schema_type(spec, (content[ct] or {}).get("schema"))
    return resolve_schema_type(spec, (next(iter(content.values())) or {}).get("schema"))
