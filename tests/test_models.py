from openapi_docgen.descriptor.endpoint import EndpointInfo, HttpMethod, ParamInfo
from openapi_docgen.descriptor.types import INT64, STRING
from openapi_docgen.model.document import Document, Info, Parameter, Schema


class TestHttpMethod:
    def test_parse_is_case_insensitive(self):
        assert HttpMethod.parse("GET") is HttpMethod.GET
        assert HttpMethod.parse("patch") is HttpMethod.PATCH
        assert HttpMethod.parse("Trace") is HttpMethod.TRACE

    def test_parse_unknown_method(self):
        assert HttpMethod.parse("CONNECT") is None
        assert HttpMethod.parse("") is None
        assert HttpMethod.parse(None) is None


class TestParamInfo:
    def test_defaults(self):
        p = ParamInfo(type=INT64)
        assert p.required is True
        assert p.deprecated is False
        assert p.description is None


class TestEndpointInfo:
    def test_create_minimal_endpoint(self):
        ep = EndpointInfo(method="GET", path="/api/users")
        assert ep.path_params == {}
        assert ep.responses == []
        assert ep.body is None
        assert ep.authorized is False

    def test_add_security_requirement_marks_authorized(self):
        ep = EndpointInfo(method="DELETE", path="/api/users/{id}", path_params={"id": ParamInfo(type=INT64)})
        ep.add_security_requirement("oauth", ["users:write"])
        ep.add_security_requirement("bearer")
        assert ep.authorized is True
        assert ep.security_requirements == {"oauth": ["users:write"], "bearer": None}

    def test_defaults_not_shared_between_instances(self):
        a = EndpointInfo(method="GET", path="/a")
        b = EndpointInfo(method="GET", path="/b")
        a.add_security_requirement("bearer")
        assert b.security_requirements == {}

    def test_type_descriptor_identity_kept(self):
        ep = EndpointInfo(method="GET", path="/x", query_params={"q": ParamInfo(type=STRING)})
        assert ep.query_params["q"].type is STRING


class TestDocumentModel:
    def test_schema_ref_alias(self):
        assert Schema(ref="#/components/schemas/User").to_dict() == {"$ref": "#/components/schemas/User"}

    def test_parameter_aliases(self):
        p = Parameter(in_="query", name="limit", required=False, schema_=Schema(type="integer"))
        assert p.to_dict() == {
            "in": "query",
            "name": "limit",
            "required": False,
            "schema": {"type": "integer"},
        }

    def test_document_defaults(self):
        doc = Document(info=Info(title="T", version="1"))
        data = doc.to_dict()
        assert data["openapi"] == "3.0.0"
        assert data["paths"] == {}
        assert data["components"] == {"schemas": {}}
        assert "servers" not in data
