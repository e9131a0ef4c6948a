"""Document-level configuration: header info, servers and security schemes.

These models are supplied by the caller (directly or via a manifest file)
and copied into the generated document.
"""

from pydantic import BaseModel, ConfigDict, Field


class DocumentHeader(BaseModel):
    title: str = "API"
    version: str = "1.0.0"
    description: str | None = None
    terms_of_service: str | None = None
    contact_name: str | None = None
    contact_url: str | None = None
    contact_email: str | None = None
    license_name: str | None = None
    license_url: str | None = None


class ServerVariableConfig(BaseModel):
    default: str
    description: str | None = None
    enum: list[str] | None = None


class ServerConfig(BaseModel):
    url: str
    description: str | None = None
    variables: dict[str, ServerVariableConfig] | None = None


class OAuthFlowConfig(BaseModel):
    authorization_url: str | None = None
    token_url: str | None = None
    refresh_url: str | None = None
    scopes: dict[str, str] | None = None


class OAuthFlowsConfig(BaseModel):
    implicit: OAuthFlowConfig | None = None
    password: OAuthFlowConfig | None = None
    client_credentials: OAuthFlowConfig | None = None
    authorization_code: OAuthFlowConfig | None = None


class SecuritySchemeConfig(BaseModel):
    """Security scheme as configured by the caller."""

    model_config = ConfigDict(populate_by_name=True)

    type: str  # apiKey / http / oauth2 / openIdConnect
    description: str | None = None
    name: str | None = None
    in_: str | None = Field(default=None, alias="in")
    scheme: str | None = None
    bearer_format: str | None = None
    flows: OAuthFlowsConfig | None = None
    open_id_connect_url: str | None = None

    @classmethod
    def bearer(cls, bearer_format: str | None = None, description: str | None = None) -> "SecuritySchemeConfig":
        return cls(type="http", scheme="bearer", bearer_format=bearer_format, description=description)

    @classmethod
    def basic(cls, description: str | None = None) -> "SecuritySchemeConfig":
        return cls(type="http", scheme="basic", description=description)


class DocumentInfo(BaseModel):
    header: DocumentHeader = DocumentHeader()
    servers: list[ServerConfig] | None = None
    security_schemes: dict[str, SecuritySchemeConfig] | None = None


def document_info_from_dict(data: dict) -> DocumentInfo:
    return DocumentInfo(
        header=DocumentHeader(**(data.get("info") or {})),
        servers=data.get("servers"),
        security_schemes=data.get("security_schemes"),
    )
