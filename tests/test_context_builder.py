"""Tests for the context_builder module."""

import pytest

from sdkgen.config import GenConfig
from sdkgen.context_builder import build_context
from sdkgen.normalizer import normalize


class TestBuildContext:
    """Test the full context builder pipeline with the petstore spec."""

    @pytest.fixture(autouse=True)
    def _context(self, swagger_doc):
        """Normalize the Swagger petstore and build its context."""
        self.spec = normalize(swagger_doc, "petstore.json")
        self.ctx = build_context(self.spec, GenConfig())
        self.services = {s["name"]: s for s in self.ctx["services"]}
        self.functions = {
            f["name"]: f for s in self.ctx["services"] for f in s["functions"]
        }

    def test_services_by_tag(self):
        assert set(self.services) == {"pet", "user"}

    def test_function_count(self):
        assert self.ctx["function_count"] == 4

    def test_operation_id_names(self):
        assert {"listPets", "createPet", "showPetById"} <= set(self.functions)

    def test_derived_name(self):
        """Operations without operationId are named from method + path."""
        assert "listV1Users" in self.functions

    def test_url_template(self):
        func = self.functions["showPetById"]
        assert func["url"] == "/v1/pets/${encodeURIComponent(String(params.petId))}"

    def test_query_params(self):
        func = self.functions["listPets"]
        assert [p["name"] for p in func["query_params"]] == ["limit"]
        assert func["has_required_params"] is False

    def test_body(self):
        func = self.functions["createPet"]
        assert func["body"]["type"] == "Pet"
        assert func["body"]["required"] is True

    def test_response_types(self):
        assert self.functions["listPets"]["response_type"] == "Pet[]"
        assert self.functions["createPet"]["response_type"] == "void"

    def test_interfaces(self):
        assert self.ctx["interface_names"] == ["Pet"]

    def test_metadata(self):
        assert self.ctx["title"] == "Petstore"
        assert self.ctx["api_version"] == "1.0.0"
        assert self.ctx["request_lib"] is None


class TestServiceGrouping:
    """Grouping and de-duplication edge cases."""

    def _spec(self, paths):
        return {"openapi": "3.0.0", "info": {"title": "t", "version": "1"}, "paths": paths}

    def test_untagged_go_to_default_service(self):
        ctx = build_context(self._spec({"/a": {"get": {"responses": {}}}}), GenConfig())
        assert [s["name"] for s in ctx["services"]] == ["defaultService"]

    def test_reserved_service_name(self):
        spec = self._spec({"/a": {"get": {"tags": ["index"], "responses": {}}}})
        ctx = build_context(spec, GenConfig())
        assert [s["name"] for s in ctx["services"]] == ["indexService"]

    def test_duplicate_names(self):
        spec = self._spec({
            "/a": {"get": {"operationId": "fetch", "responses": {}}},
            "/b": {
                "get": {"operationId": "fetch", "responses": {}},
                "post": {"operationId": "fetch", "responses": {}},
            },
        })
        ctx = build_context(spec, GenConfig())
        names = [f["name"] for f in ctx["services"][0]["functions"]]
        assert len(names) == len(set(names)) == 3
        assert names[0] == "fetch"

    def test_snake_case_option(self):
        spec = self._spec({"/a": {"get": {"operationId": "fetchAll", "responses": {}}}})
        ctx = build_context(spec, GenConfig(camel_case=False))
        assert ctx["services"][0]["functions"][0]["name"] == "fetch_all"
