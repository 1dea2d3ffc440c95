"""Patch known malformations in Swagger 2.0 and OpenAPI 3.x documents.

Both fixers mutate the document in place and are idempotent. They only
fill in or coerce structure; they never drop operations or paths.

Handles:
- Missing info.title / info.version
- Operations without responses, responses without description
- Parameters without type/schema, path parameters not marked required
- List-valued schema types ("type": ["string", "null"])
- Object/array schemas that omit their type
- Malformed "required" lists
- x-nullable (Swagger) -> nullable
"""

from __future__ import annotations

from typing import Any

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_COMPOSITIONS = ("allOf", "oneOf", "anyOf")

_DEFAULT_RESPONSES = {"200": {"description": "OK"}}


def _fix_info(doc: dict[str, Any]) -> None:
    info = doc.get("info")
    if not isinstance(info, dict):
        return
    info.setdefault("title", "API")
    if info.get("version") is None:
        info["version"] = "1.0.0"
    elif not isinstance(info["version"], str):
        info["version"] = str(info["version"])


def _fix_paths(doc: dict[str, Any]) -> None:
    paths = doc.get("paths")
    if paths is not None and not isinstance(paths, dict):
        doc["paths"] = {}


def iter_operations(doc: dict[str, Any]):
    """Yield (path, method, operation) for every operation in the document."""
    for path, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield path, method, operation


def fix_schema(schema: Any, swagger: bool = False) -> None:
    """Recursively repair a schema object."""
    if not isinstance(schema, dict) or "$ref" in schema:
        return

    schema_type = schema.get("type")
    if isinstance(schema_type, list):
        members = [t for t in schema_type if t != "null"]
        if len(members) < len(schema_type):
            schema["nullable"] = True
        if members:
            schema["type"] = members[0]
        else:
            del schema["type"]
    elif schema_type is None:
        if isinstance(schema.get("properties"), dict):
            schema["type"] = "object"
        elif "items" in schema:
            schema["type"] = "array"

    if swagger and "x-nullable" in schema:
        schema["nullable"] = bool(schema.pop("x-nullable"))

    required = schema.get("required")
    if required is not None and not (
        isinstance(required, list) and all(isinstance(r, str) for r in required)
    ):
        del schema["required"]

    properties = schema.get("properties")
    if isinstance(properties, dict):
        for sub in properties.values():
            fix_schema(sub, swagger)
    elif properties is not None:
        del schema["properties"]

    if schema.get("type") == "array" and not isinstance(schema.get("items"), dict):
        schema["items"] = {}
    fix_schema(schema.get("items"), swagger)

    if isinstance(schema.get("additionalProperties"), dict):
        fix_schema(schema["additionalProperties"], swagger)

    for key in _COMPOSITIONS:
        if key in schema:
            if isinstance(schema[key], list):
                for sub in schema[key]:
                    fix_schema(sub, swagger)
            else:
                del schema[key]


def _fix_responses(operation: dict[str, Any], swagger: bool) -> None:
    responses = operation.get("responses")
    if not isinstance(responses, dict) or not responses:
        operation["responses"] = {k: dict(v) for k, v in _DEFAULT_RESPONSES.items()}
        return
    for code in list(responses):
        response = responses[code]
        if not isinstance(code, str):
            responses[str(code)] = responses.pop(code)
        if not isinstance(response, dict):
            responses[str(code)] = {"description": ""}
            continue
        if "$ref" in response:
            continue
        if response.get("description") is None:
            response["description"] = ""
        if swagger:
            fix_schema(response.get("schema"), swagger=True)
        else:
            for media in (response.get("content") or {}).values():
                if isinstance(media, dict):
                    fix_schema(media.get("schema"))


def _fix_swagger_parameter(param: dict[str, Any]) -> None:
    if "$ref" in param:
        return
    param.setdefault("in", "query")
    if param["in"] == "body":
        if not isinstance(param.get("schema"), dict):
            param["schema"] = {"type": "object"}
        fix_schema(param["schema"], swagger=True)
        return
    if param["in"] == "path":
        param["required"] = True
    param_type = param.get("type")
    if isinstance(param_type, list):
        members = [t for t in param_type if t != "null"]
        param["type"] = members[0] if members else "string"
    elif not param_type:
        param["type"] = "string"
    if param["type"] == "array" and not isinstance(param.get("items"), dict):
        param["items"] = {"type": "string"}


def _fix_openapi_parameter(param: dict[str, Any]) -> None:
    if "$ref" in param:
        return
    param.setdefault("in", "query")
    if param["in"] == "path":
        param["required"] = True
    if not isinstance(param.get("schema"), dict) and "content" not in param:
        param["schema"] = {"type": "string"}
    fix_schema(param.get("schema"))


def _parameters(container: dict[str, Any]) -> list[dict[str, Any]]:
    params = container.get("parameters")
    if params is None:
        return []
    if not isinstance(params, list):
        container["parameters"] = []
        return []
    # Inline parameters other than a body need a name to be addressable
    kept = [
        p for p in params
        if isinstance(p, dict)
        and ("$ref" in p or p.get("in") == "body" or isinstance(p.get("name"), str))
    ]
    container["parameters"] = kept
    return kept


def fix_swagger(doc: dict[str, Any]) -> dict[str, Any]:
    """Repair a Swagger 2.0 document in place and return it."""
    _fix_info(doc)
    _fix_paths(doc)
    for path_item in (doc.get("paths") or {}).values():
        if isinstance(path_item, dict):
            for param in _parameters(path_item):
                _fix_swagger_parameter(param)
    for _, _, operation in iter_operations(doc):
        for param in _parameters(operation):
            _fix_swagger_parameter(param)
        _fix_responses(operation, swagger=True)
    for param in (doc.get("parameters") or {}).values():
        if isinstance(param, dict):
            _fix_swagger_parameter(param)
    for schema in (doc.get("definitions") or {}).values():
        fix_schema(schema, swagger=True)
    return doc


def fix_openapi(doc: dict[str, Any]) -> dict[str, Any]:
    """Repair an OpenAPI 3.x document in place and return it."""
    _fix_info(doc)
    _fix_paths(doc)
    if isinstance(doc.get("openapi"), (int, float)):
        doc["openapi"] = str(doc["openapi"])
    for path_item in (doc.get("paths") or {}).values():
        if isinstance(path_item, dict):
            for param in _parameters(path_item):
                _fix_openapi_parameter(param)
    for _, _, operation in iter_operations(doc):
        for param in _parameters(operation):
            _fix_openapi_parameter(param)
        body = operation.get("requestBody")
        if isinstance(body, dict):
            for media in (body.get("content") or {}).values():
                if isinstance(media, dict):
                    fix_schema(media.get("schema"))
        _fix_responses(operation, swagger=False)

    components = doc.get("components") or {}
    for schema in (components.get("schemas") or {}).values():
        fix_schema(schema)
    for param in (components.get("parameters") or {}).values():
        if isinstance(param, dict):
            _fix_openapi_parameter(param)
    return doc
