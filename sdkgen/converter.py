"""Convert a Swagger 2.0 document into an OpenAPI 3.0 document.

The input is left untouched; a new document is built. basePath is not
applied here: the normalizer folds it into the path keys afterwards, so
servers only carry scheme and host.
"""

from __future__ import annotations

import copy
from typing import Any

from .repair import HTTP_METHODS

OPENAPI_VERSION = "3.0.0"

_DEFAULT_MEDIA = "application/json"
_FORM_MEDIA = "application/x-www-form-urlencoded"
_MULTIPART_MEDIA = "multipart/form-data"

# Keywords that live on a Swagger parameter but belong to its schema in 3.0
_SCHEMA_KEYWORDS = (
    "type", "format", "items", "default", "enum", "maximum", "exclusiveMaximum",
    "minimum", "exclusiveMinimum", "maxLength", "minLength", "pattern",
    "maxItems", "minItems", "uniqueItems", "multipleOf",
)

_REF_PREFIXES = (
    ("#/definitions/", "#/components/schemas/"),
    ("#/responses/", "#/components/responses/"),
)


def _vendor_extensions(node: dict[str, Any]) -> dict[str, Any]:
    return {k: copy.deepcopy(v) for k, v in node.items() if k.startswith("x-")}


def _rewrite_refs(node: Any, body_params: set[str]) -> Any:
    """Point every $ref at its 3.0 components location, recursively."""
    if isinstance(node, list):
        return [_rewrite_refs(item, body_params) for item in node]
    if not isinstance(node, dict):
        return node
    result = {}
    for key, value in node.items():
        if key == "$ref" and isinstance(value, str):
            result[key] = _rewrite_ref(value, body_params)
        else:
            result[key] = _rewrite_refs(value, body_params)
    return result


def _rewrite_ref(ref: str, body_params: set[str]) -> str:
    for old, new in _REF_PREFIXES:
        if ref.startswith(old):
            return new + ref[len(old):]
    if ref.startswith("#/parameters/"):
        name = ref[len("#/parameters/"):]
        if name in body_params:
            return "#/components/requestBodies/" + name
        return "#/components/parameters/" + name
    return ref


def convert_schema(schema: Any) -> Any:
    """Translate Swagger-only schema keywords into their 3.0 forms."""
    if isinstance(schema, list):
        return [convert_schema(s) for s in schema]
    if not isinstance(schema, dict):
        return schema
    result: dict[str, Any] = {}
    for key, value in schema.items():
        if key == "x-nullable":
            result["nullable"] = bool(value)
        elif key == "discriminator" and isinstance(value, str):
            result["discriminator"] = {"propertyName": value}
        elif key in ("properties", "definitions") and isinstance(value, dict):
            result[key] = {k: convert_schema(v) for k, v in value.items()}
        elif key in ("items", "additionalProperties", "not", "allOf", "oneOf", "anyOf"):
            result[key] = convert_schema(value)
        else:
            result[key] = value
    if result.get("type") == "file":
        result["type"] = "string"
        result["format"] = "binary"
    return result


def _convert_parameter(param: dict[str, Any]) -> dict[str, Any]:
    """Convert a non-body Swagger parameter."""
    if "$ref" in param:
        return dict(param)
    converted: dict[str, Any] = {}
    schema: dict[str, Any] = {}
    for key, value in param.items():
        if key in _SCHEMA_KEYWORDS:
            schema[key] = value
        elif key == "collectionFormat":
            if value == "multi":
                converted["style"] = "form"
                converted["explode"] = True
            elif value == "csv":
                converted["explode"] = False
            elif value == "ssv":
                converted["style"] = "spaceDelimited"
            elif value == "pipes":
                converted["style"] = "pipeDelimited"
        elif key == "allowEmptyValue" and param.get("in") != "query":
            continue
        else:
            converted[key] = value
    converted["schema"] = convert_schema(schema)
    return converted


def _body_request(param: dict[str, Any], consumes: list[str]) -> dict[str, Any]:
    schema = convert_schema(param.get("schema") or {"type": "object"})
    body: dict[str, Any] = {
        "content": {media: {"schema": copy.deepcopy(schema)} for media in consumes},
    }
    if param.get("description"):
        body["description"] = param["description"]
    if param.get("required"):
        body["required"] = True
    body.update(_vendor_extensions(param))
    return body


def _form_request(params: list[dict[str, Any]], consumes: list[str]) -> dict[str, Any]:
    properties: dict[str, Any] = {}
    required: list[str] = []
    has_file = False
    for param in params:
        if not isinstance(param.get("name"), str):
            continue
        prop = convert_schema({k: v for k, v in param.items() if k in _SCHEMA_KEYWORDS})
        if param.get("type") == "file":
            has_file = True
        if param.get("description"):
            prop["description"] = param["description"]
        properties[param["name"]] = prop
        if param.get("required"):
            required.append(param["name"])
    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required

    media_types = [m for m in consumes if m in (_FORM_MEDIA, _MULTIPART_MEDIA)]
    if not media_types:
        media_types = [_MULTIPART_MEDIA if has_file else _FORM_MEDIA]
    elif has_file and _MULTIPART_MEDIA in media_types:
        media_types = [_MULTIPART_MEDIA]
    return {"content": {media: {"schema": copy.deepcopy(schema)} for media in media_types}}


def _convert_response(response: dict[str, Any], produces: list[str]) -> dict[str, Any]:
    if "$ref" in response:
        return dict(response)
    converted: dict[str, Any] = {"description": response.get("description", "")}
    if "schema" in response:
        schema = convert_schema(response["schema"])
        converted["content"] = {media: {"schema": copy.deepcopy(schema)} for media in produces}
    if "headers" in response:
        converted["headers"] = {
            name: _convert_header(header) for name, header in response["headers"].items()
        }
    converted.update(_vendor_extensions(response))
    return converted


def _convert_header(header: dict[str, Any]) -> dict[str, Any]:
    converted: dict[str, Any] = {}
    schema: dict[str, Any] = {}
    for key, value in header.items():
        if key in _SCHEMA_KEYWORDS:
            schema[key] = value
        elif key != "collectionFormat":
            converted[key] = value
    converted["schema"] = convert_schema(schema)
    return converted


def _resolve_param(
    param: dict[str, Any], global_params: dict[str, Any]
) -> dict[str, Any]:
    """Return the target of a local parameter $ref, or the parameter itself."""
    ref = param.get("$ref")
    if isinstance(ref, str) and ref.startswith("#/parameters/"):
        return global_params.get(ref[len("#/parameters/"):], param)
    return param


def _convert_operation(
    operation: dict[str, Any],
    inherited: list[dict[str, Any]],
    doc: dict[str, Any],
) -> dict[str, Any]:
    global_params = doc.get("parameters") or {}
    consumes = operation.get("consumes") or doc.get("consumes") or [_DEFAULT_MEDIA]
    produces = operation.get("produces") or doc.get("produces") or [_DEFAULT_MEDIA]

    result: dict[str, Any] = {}
    for key, value in operation.items():
        if key in ("parameters", "responses", "consumes", "produces", "schemes"):
            continue
        result[key] = copy.deepcopy(value)

    own = operation.get("parameters") or []
    own_keys = set()
    for param in own:
        target = _resolve_param(param, global_params)
        own_keys.add((target.get("name"), target.get("in")))
    params = [p for p in inherited if (p.get("name"), p.get("in")) not in own_keys] + list(own)

    converted: list[dict[str, Any]] = []
    form_params: list[dict[str, Any]] = []
    for param in params:
        target = _resolve_param(param, global_params)
        location = target.get("in")
        if location == "body":
            if "$ref" in param:
                result["requestBody"] = {"$ref": param["$ref"]}
            else:
                result["requestBody"] = _body_request(param, consumes)
        elif location == "formData":
            form_params.append(target)
        else:
            converted.append(_convert_parameter(param))
    if converted:
        result["parameters"] = converted
    if form_params and "requestBody" not in result:
        result["requestBody"] = _form_request(form_params, consumes)

    result["responses"] = {
        str(code): _convert_response(response, produces)
        for code, response in (operation.get("responses") or {}).items()
    }
    return result


def _convert_security_scheme(scheme: dict[str, Any]) -> dict[str, Any]:
    scheme_type = scheme.get("type")
    extra = _vendor_extensions(scheme)
    if "description" in scheme:
        extra["description"] = scheme["description"]
    if scheme_type == "basic":
        return {"type": "http", "scheme": "basic", **extra}
    if scheme_type == "apiKey":
        return {"type": "apiKey", "name": scheme.get("name"), "in": scheme.get("in"), **extra}
    if scheme_type == "oauth2":
        flow: dict[str, Any] = {"scopes": dict(scheme.get("scopes") or {})}
        if "authorizationUrl" in scheme:
            flow["authorizationUrl"] = scheme["authorizationUrl"]
        if "tokenUrl" in scheme:
            flow["tokenUrl"] = scheme["tokenUrl"]
        flow_name = {
            "implicit": "implicit",
            "password": "password",
            "application": "clientCredentials",
            "accessCode": "authorizationCode",
        }.get(scheme.get("flow"), "implicit")
        return {"type": "oauth2", "flows": {flow_name: flow}, **extra}
    return dict(scheme)


def _servers(doc: dict[str, Any]) -> list[dict[str, Any]]:
    host = doc.get("host")
    if not host:
        return []
    schemes = doc.get("schemes") or ["https"]
    return [{"url": f"{scheme}://{host}"} for scheme in schemes]


def swagger_to_openapi(doc: dict[str, Any]) -> dict[str, Any]:
    """Build an OpenAPI 3.0 document equivalent to the Swagger 2.0 *doc*."""
    global_params = doc.get("parameters") or {}
    body_params = {
        name for name, p in global_params.items()
        if isinstance(p, dict) and p.get("in") == "body"
    }

    result: dict[str, Any] = {
        "openapi": OPENAPI_VERSION,
        "info": copy.deepcopy(doc.get("info") or {}),
    }
    servers = _servers(doc)
    if servers:
        result["servers"] = servers
    for key in ("tags", "externalDocs", "security"):
        if key in doc:
            result[key] = copy.deepcopy(doc[key])
    result.update(_vendor_extensions(doc))

    paths: dict[str, Any] = {}
    for path, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        if "$ref" in path_item:
            paths[path] = dict(path_item)
            continue
        inherited = path_item.get("parameters") or []
        new_item: dict[str, Any] = {}
        shared = [
            _convert_parameter(p) for p in inherited
            if _resolve_param(p, global_params).get("in") not in ("body", "formData")
        ]
        if shared:
            new_item["parameters"] = shared
        body_inherited = [
            p for p in inherited
            if _resolve_param(p, global_params).get("in") in ("body", "formData")
        ]
        for key, value in path_item.items():
            if key in HTTP_METHODS and isinstance(value, dict):
                new_item[key] = _convert_operation(value, body_inherited, doc)
            elif key.startswith("x-") or key in ("summary", "description"):
                new_item[key] = copy.deepcopy(value)
        paths[path] = new_item
    result["paths"] = paths

    components: dict[str, Any] = {}
    if doc.get("definitions"):
        components["schemas"] = {k: convert_schema(v) for k, v in doc["definitions"].items()}
    consumes = doc.get("consumes") or [_DEFAULT_MEDIA]
    produces = doc.get("produces") or [_DEFAULT_MEDIA]
    parameters = {
        name: _convert_parameter(p) for name, p in global_params.items()
        if name not in body_params and p.get("in") != "formData"
    }
    if parameters:
        components["parameters"] = parameters
    if body_params:
        components["requestBodies"] = {
            name: _body_request(global_params[name], consumes) for name in sorted(body_params)
        }
    if doc.get("responses"):
        components["responses"] = {
            name: _convert_response(r, produces) for name, r in doc["responses"].items()
        }
    if doc.get("securityDefinitions"):
        components["securitySchemes"] = {
            name: _convert_security_scheme(s) for name, s in doc["securityDefinitions"].items()
        }
    if components:
        result["components"] = components

    return _rewrite_refs(result, body_params)
