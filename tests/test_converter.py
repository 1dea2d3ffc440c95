"""Tests for Swagger 2.0 -> OpenAPI 3.0 conversion."""

import copy

from sdkgen.converter import convert_schema, swagger_to_openapi
from sdkgen.repair import fix_swagger


def _convert(doc):
    return swagger_to_openapi(fix_swagger(doc))


class TestSwaggerToOpenapi:
    """Document-level conversion."""

    def test_version_and_info(self, swagger_doc):
        result = _convert(swagger_doc)
        assert result["openapi"] == "3.0.0"
        assert result["info"] == {"title": "Petstore", "version": "1.0.0"}

    def test_servers_exclude_base_path(self, swagger_doc):
        result = _convert(swagger_doc)
        assert result["servers"] == [{"url": "https://petstore.example.com"}]

    def test_no_host_no_servers(self, swagger_doc):
        del swagger_doc["host"]
        assert "servers" not in _convert(swagger_doc)

    def test_paths_keep_original_keys(self, swagger_doc):
        result = _convert(swagger_doc)
        assert set(result["paths"]) == {"/pets", "/pets/{petId}", "/users"}

    def test_input_not_mutated(self, swagger_doc):
        fix_swagger(swagger_doc)
        before = copy.deepcopy(swagger_doc)
        swagger_to_openapi(swagger_doc)
        assert swagger_doc == before

    def test_definitions_to_components(self, swagger_doc):
        result = _convert(swagger_doc)
        pet = result["components"]["schemas"]["Pet"]
        assert pet["type"] == "object"
        assert pet["properties"]["tag"] == {"type": "string", "nullable": True}

    def test_refs_rewritten(self, swagger_doc):
        result = _convert(swagger_doc)
        schema = result["paths"]["/pets"]["get"]["responses"]["200"]["content"]["application/json"]["schema"]
        assert schema == {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}}

    def test_query_parameter_schema(self, swagger_doc):
        result = _convert(swagger_doc)
        param = result["paths"]["/pets"]["get"]["parameters"][0]
        assert param == {
            "name": "limit",
            "in": "query",
            "schema": {"type": "integer", "format": "int32"},
        }

    def test_path_level_parameters(self, swagger_doc):
        result = _convert(swagger_doc)
        item = result["paths"]["/pets/{petId}"]
        assert item["parameters"][0]["schema"] == {"type": "integer"}
        assert item["parameters"][0]["required"] is True

    def test_body_to_request_body(self, swagger_doc):
        result = _convert(swagger_doc)
        post = result["paths"]["/pets"]["post"]
        assert "parameters" not in post
        assert post["requestBody"] == {
            "content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}},
            "required": True,
        }

    def test_response_without_schema(self, swagger_doc):
        result = _convert(swagger_doc)
        assert result["paths"]["/pets"]["post"]["responses"]["201"] == {"description": "Created"}

    def test_form_data(self):
        doc = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "paths": {
                "/upload": {
                    "post": {
                        "consumes": ["multipart/form-data"],
                        "parameters": [
                            {"name": "file", "in": "formData", "type": "file", "required": True},
                            {"name": "note", "in": "formData", "type": "string"},
                        ],
                        "responses": {"200": {"description": "ok"}},
                    },
                },
            },
        }
        post = _convert(doc)["paths"]["/upload"]["post"]
        schema = post["requestBody"]["content"]["multipart/form-data"]["schema"]
        assert schema["properties"]["file"] == {"type": "string", "format": "binary"}
        assert schema["required"] == ["file"]

    def test_form_data_without_name_skipped(self):
        doc = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "paths": {
                "/upload": {
                    "post": {
                        "parameters": [
                            {"in": "formData", "type": "string"},
                            {"name": "note", "in": "formData", "type": "string"},
                        ],
                        "responses": {"200": {"description": "ok"}},
                    },
                },
            },
        }
        # Unrepaired input reaches the converter with the nameless entry intact
        post = swagger_to_openapi(doc)["paths"]["/upload"]["post"]
        schema = post["requestBody"]["content"]["application/x-www-form-urlencoded"]["schema"]
        assert list(schema["properties"]) == ["note"]

    def test_urlencoded_form_default(self):
        doc = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "paths": {
                "/login": {
                    "post": {
                        "parameters": [{"name": "user", "in": "formData", "type": "string"}],
                        "responses": {"200": {"description": "ok"}},
                    },
                },
            },
        }
        body = _convert(doc)["paths"]["/login"]["post"]["requestBody"]
        assert list(body["content"]) == ["application/x-www-form-urlencoded"]

    def test_global_parameters(self):
        doc = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "parameters": {
                "Limit": {"name": "limit", "in": "query", "type": "integer"},
                "Payload": {"name": "payload", "in": "body", "schema": {"type": "object"}},
            },
            "paths": {
                "/items": {
                    "post": {
                        "parameters": [
                            {"$ref": "#/parameters/Limit"},
                            {"$ref": "#/parameters/Payload"},
                        ],
                        "responses": {"200": {"description": "ok"}},
                    },
                },
            },
        }
        result = _convert(doc)
        post = result["paths"]["/items"]["post"]
        assert post["parameters"] == [{"$ref": "#/components/parameters/Limit"}]
        assert post["requestBody"] == {"$ref": "#/components/requestBodies/Payload"}
        assert result["components"]["parameters"]["Limit"]["schema"] == {"type": "integer"}
        assert "Payload" in result["components"]["requestBodies"]

    def test_security_definitions(self):
        doc = {
            "swagger": "2.0",
            "info": {"title": "t", "version": "1"},
            "paths": {"/a": {"get": {"responses": {"200": {"description": "ok"}}}}},
            "securityDefinitions": {
                "basic": {"type": "basic"},
                "key": {"type": "apiKey", "name": "X-Key", "in": "header"},
                "oauth": {
                    "type": "oauth2",
                    "flow": "accessCode",
                    "authorizationUrl": "https://auth/authorize",
                    "tokenUrl": "https://auth/token",
                    "scopes": {"read": "Read"},
                },
            },
        }
        schemes = _convert(doc)["components"]["securitySchemes"]
        assert schemes["basic"] == {"type": "http", "scheme": "basic"}
        assert schemes["key"] == {"type": "apiKey", "name": "X-Key", "in": "header"}
        assert schemes["oauth"]["flows"]["authorizationCode"]["tokenUrl"] == "https://auth/token"

    def test_produces_media_types(self, swagger_doc):
        swagger_doc["paths"]["/users"]["get"]["produces"] = ["application/xml"]
        response = _convert(swagger_doc)["paths"]["/users"]["get"]["responses"]["200"]
        assert list(response["content"]) == ["application/xml"]


class TestConvertSchema:
    """Schema keyword translation."""

    def test_file_type(self):
        assert convert_schema({"type": "file"}) == {"type": "string", "format": "binary"}

    def test_discriminator(self):
        assert convert_schema({"discriminator": "kind"}) == {"discriminator": {"propertyName": "kind"}}

    def test_nested(self):
        schema = {"type": "array", "items": {"type": "object", "x-nullable": True}}
        assert convert_schema(schema)["items"] == {"type": "object", "nullable": True}
