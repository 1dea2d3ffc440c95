"""Shared fixtures: small Swagger 2.0 and OpenAPI 3.0 petstore specs."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Callable

import pytest


_SWAGGER: dict[str, Any] = {
    "swagger": "2.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "host": "petstore.example.com",
    "basePath": "/v1",
    "schemes": ["https"],
    "consumes": ["application/json"],
    "produces": ["application/json"],
    "paths": {
        "/pets": {
            "get": {
                "tags": ["pet"],
                "operationId": "listPets",
                "summary": "List all pets",
                "parameters": [
                    {"name": "limit", "in": "query", "type": "integer", "format": "int32"},
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "schema": {"type": "array", "items": {"$ref": "#/definitions/Pet"}},
                    },
                },
            },
            "post": {
                "tags": ["pet"],
                "operationId": "createPet",
                "parameters": [
                    {"name": "body", "in": "body", "required": True, "schema": {"$ref": "#/definitions/Pet"}},
                ],
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "type": "integer"},
            ],
            "get": {
                "tags": ["pet"],
                "operationId": "showPetById",
                "responses": {
                    "200": {"description": "A pet", "schema": {"$ref": "#/definitions/Pet"}},
                },
            },
        },
        "/users": {
            "get": {
                "tags": ["user"],
                "responses": {
                    "200": {"description": "Users", "schema": {"type": "array", "items": {"type": "string"}}},
                },
            },
        },
    },
    "definitions": {
        "Pet": {
            "required": ["id", "name"],
            "properties": {
                "id": {"type": "integer", "format": "int64"},
                "name": {"type": "string"},
                "tag": {"type": "string", "x-nullable": True},
            },
        },
    },
}


_OPENAPI: dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "tags": ["pet"],
                "operationId": "listPets",
                "parameters": [
                    {"name": "limit", "in": "query", "schema": {"type": "integer"}},
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                            },
                        },
                    },
                },
            },
        },
        "/pets/{petId}": {
            "get": {
                "tags": ["pet"],
                "operationId": "showPetById",
                "parameters": [
                    {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
                ],
                "responses": {
                    "200": {
                        "description": "A pet",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}},
                        },
                    },
                },
            },
        },
    },
    "components": {
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                },
            },
        },
    },
}


@pytest.fixture
def swagger_doc() -> dict[str, Any]:
    """A fresh copy of the Swagger 2.0 petstore."""
    return copy.deepcopy(_SWAGGER)


@pytest.fixture
def openapi_doc() -> dict[str, Any]:
    """A fresh copy of the OpenAPI 3.0 petstore."""
    return copy.deepcopy(_OPENAPI)


@pytest.fixture
def write_spec(tmp_path: Path) -> Callable[[str, Any], str]:
    """Write a spec (dict or raw text) under tmp_path and return its path."""
    def _write(name: str, content: Any) -> str:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return str(path)
    return _write
