import pytest

from openapi_docgen.descriptor.endpoint import (
    BodyInfo,
    ContentHint,
    EndpointInfo,
    ParamInfo,
    ResponseInfo,
)
from openapi_docgen.descriptor.types import INT32, INT64, STRING, TypeDescriptor
from openapi_docgen.errors import ConfigurationError
from openapi_docgen.generator import paths
from openapi_docgen.generator.paths import (
    collect_references,
    generate_parameters,
    generate_request_body,
    generate_responses,
    normalize_path,
)

PET = TypeDescriptor.object("Pet", fields={"id": INT64, "name": STRING})


def _endpoint(method: str = "GET", path: str = "/pets", **kwargs) -> EndpointInfo:
    return EndpointInfo(method=method, path=path, **kwargs)


class TestPaths:
    def test_normalize_path(self):
        assert normalize_path("pets") == "/pets"
        assert normalize_path("/pets") == "/pets"
        assert normalize_path("") is None

    def test_shared_path_merges_methods(self):
        snapshot = collect_references([
            _endpoint("GET", "/items", name="listItems"),
            _endpoint("POST", "items", name="createItem"),
        ])
        assert list(snapshot.paths) == ["/items"]
        item = snapshot.paths["/items"]
        assert item.get.operation_id == "listItems"
        assert item.post.operation_id == "createItem"

    def test_empty_path_skipped(self):
        snapshot = collect_references([_endpoint(path=""), _endpoint(path="/ok")])
        assert list(snapshot.paths) == ["/ok"]

    def test_unknown_method_contributes_nothing(self):
        snapshot = collect_references([_endpoint("CONNECT", "/tunnel")])
        assert snapshot.paths["/tunnel"].operations() == {}

    def test_method_case_insensitive(self):
        snapshot = collect_references([_endpoint("delete", "/pets/{id}")])
        assert snapshot.paths["/pets/{id}"].delete is not None

    def test_operation_metadata(self):
        snapshot = collect_references([
            _endpoint(name="listPets", summary="List pets", description="All of them"),
        ])
        op = snapshot.paths["/pets"].get
        assert (op.operation_id, op.summary, op.description) == ("listPets", "List pets", "All of them")

    def test_all_canonical_methods(self):
        methods = ["GET", "PUT", "POST", "DELETE", "OPTIONS", "HEAD", "PATCH", "TRACE"]
        snapshot = collect_references([_endpoint(m, "/all") for m in methods])
        assert set(snapshot.paths["/all"].operations()) == {m.lower() for m in methods}


class TestParameters:
    def test_order_headers_path_query(self):
        ep = _endpoint(
            path="/pets/{id}",
            headers={"X-Trace": ParamInfo(type=STRING, required=False)},
            path_params={"id": ParamInfo(type=INT64)},
            query_params={"verbose": ParamInfo(type=STRING, required=False)},
        )
        params = generate_parameters(ep, {})
        assert [(p.in_, p.name) for p in params] == [("header", "X-Trace"), ("path", "id"), ("query", "verbose")]

    @pytest.mark.parametrize("header", ["Authorization", "authorization", "AUTHORIZATION"])
    def test_authorization_header_excluded(self, header):
        ep = _endpoint(headers={header: ParamInfo(type=STRING), "X-Other": ParamInfo(type=STRING)})
        assert [p.name for p in generate_parameters(ep, {})] == ["X-Other"]

    def test_param_fields_copied(self):
        ep = _endpoint(query_params={"limit": ParamInfo(type=INT32, description="max", required=False, deprecated=True)})
        param = generate_parameters(ep, {})[0].to_dict()
        assert param == {
            "in": "query",
            "name": "limit",
            "description": "max",
            "required": False,
            "deprecated": True,
            "schema": {"type": "integer", "format": "int32"},
        }

    def test_object_param_is_referenced(self):
        used = {}
        ep = _endpoint(query_params={"filter": ParamInfo(type=PET)})
        params = generate_parameters(ep, used)
        assert params[0].schema_.ref == "#/components/schemas/Pet"
        assert used == {"Pet": PET}


class TestRequestBody:
    def test_consumes_one_entry_per_content_type(self):
        ep = _endpoint(
            "POST",
            consumes=[
                ContentHint(content_type="application/json", schema_type=PET),
                ContentHint(content_type="application/xml", schema_type=PET),
            ],
        )
        body = generate_request_body(ep, True, {})
        assert body.description == "request body"
        assert list(body.content) == ["application/json", "application/xml"]

    def test_consumes_wins_over_body(self):
        ep = _endpoint(
            "POST",
            consumes=[ContentHint(content_type="application/xml", schema_type=PET)],
            body=BodyInfo(name="pet", type=PET, content_type="application/json"),
        )
        assert list(generate_request_body(ep, True, {}).content) == ["application/xml"]

    def test_body_with_declared_content_type(self):
        ep = _endpoint("POST", body=BodyInfo(name="pet", type=PET, content_type="application/vnd.pet+json"))
        assert list(generate_request_body(ep, True, {}).content) == ["application/vnd.pet+json"]

    @pytest.mark.parametrize(
        "body_type, expected",
        [
            (PET, "application/json"),
            (TypeDescriptor.list_of(PET), "application/json"),
            (TypeDescriptor.map_of(STRING), "application/json"),
            (STRING, "text/plain"),
            (TypeDescriptor.custom("string", "binary"), "text/plain"),
        ],
    )
    def test_body_content_type_inferred(self, body_type, expected):
        ep = _endpoint("POST", body=BodyInfo(name="b", type=body_type))
        assert list(generate_request_body(ep, True, {}).content) == [expected]

    def test_no_body(self):
        assert generate_request_body(_endpoint(), True, {}) is None


class TestResponses:
    def test_default_response(self):
        responses = generate_responses(_endpoint(), True, {})
        assert {code: r.to_dict() for code, r in responses.items()} == {
            "200": {
                "description": "success",
                "content": {"text/plain": {"schema": {"type": "string"}}},
            }
        }

    def test_declared_responses_keyed_by_code(self):
        used = {}
        ep = _endpoint(responses=[
            ResponseInfo(status_code=200, description="ok", content_type="application/json", schema_type=PET),
            ResponseInfo(status_code=404, description="missing", content_type="text/plain", schema_type=STRING),
        ])
        responses = generate_responses(ep, True, used)
        assert list(responses) == ["200", "404"]
        assert responses["200"].content["application/json"].schema_.ref == "#/components/schemas/Pet"
        assert responses["404"].description == "missing"
        assert used == {"Pet": PET}


class TestSecurity:
    def test_authorized_without_requirements_fails(self):
        with pytest.raises(ConfigurationError):
            collect_references([_endpoint(authorized=True)])

    def test_requirements_without_authorized_fails(self):
        with pytest.raises(ConfigurationError):
            collect_references([_endpoint(security_requirements={"bearer": None}, authorized=False)])

    def test_checked_even_for_unknown_method(self):
        with pytest.raises(ConfigurationError):
            collect_references([_endpoint("CONNECT", authorized=True)])

    def test_requirements_rendered_and_recorded(self):
        ep = _endpoint()
        ep.add_security_requirement("bearer")
        ep.add_security_requirement("oauth", ["pets:read", "pets:write"])
        snapshot = collect_references([ep])
        assert snapshot.paths["/pets"].get.security == [
            {"bearer": []},
            {"oauth": ["pets:read", "pets:write"]},
        ]
        assert snapshot.used_security_schemes == ["bearer", "oauth"]

    def test_checked_once_per_endpoint(self, monkeypatch):
        calls = []
        original = paths.check_authorization
        monkeypatch.setattr(paths, "check_authorization", lambda ep: calls.append(ep) or original(ep))
        ep = _endpoint()
        ep.add_security_requirement("bearer")
        collect_references([ep, _endpoint("POST")])
        assert len(calls) == 2

    def test_unauthorized_endpoint_has_no_security(self):
        snapshot = collect_references([_endpoint()])
        assert snapshot.paths["/pets"].get.security is None
        assert snapshot.used_security_schemes == []


class TestCollectReferences:
    def test_registries_are_fresh_per_call(self):
        ep = _endpoint(responses=[
            ResponseInfo(status_code=200, description="ok", content_type="application/json", schema_type=PET),
        ])
        first = collect_references([ep])
        second = collect_references([_endpoint()])
        assert list(first.used_types) == ["Pet"]
        assert second.used_types == {}
