"""Maps configured security schemes into document security schemes."""

from openapi_docgen.config import OAuthFlowConfig, OAuthFlowsConfig, SecuritySchemeConfig
from openapi_docgen.errors import ConfigurationError
from openapi_docgen.model.document import OAuthFlow, OAuthFlows, SecurityScheme


def generate_security_schemes(
    configured: dict[str, SecuritySchemeConfig] | None,
    used_names: list[str],
) -> dict[str, SecurityScheme] | None:
    """Emit a scheme for every used name.

    Every used name must be configured; the document would otherwise
    reference an undefined scheme.
    """
    missing = [name for name in used_names if name not in (configured or {})]
    if missing:
        raise ConfigurationError(f"Requested unknown security scheme(s): {', '.join(missing)}")
    if configured is None:
        return None
    return {name: generate_security_scheme(configured[name]) for name in used_names}


def generate_security_scheme(config: SecuritySchemeConfig) -> SecurityScheme:
    return SecurityScheme(
        type=config.type,
        description=config.description,
        name=config.name,
        in_=config.in_,
        scheme=config.scheme,
        bearer_format=config.bearer_format,
        flows=_generate_flows(config.flows),
        open_id_connect_url=config.open_id_connect_url,
    )


def _generate_flows(flows: OAuthFlowsConfig | None) -> OAuthFlows | None:
    if flows is None:
        return None
    return OAuthFlows(
        implicit=_generate_flow(flows.implicit),
        password=_generate_flow(flows.password),
        client_credentials=_generate_flow(flows.client_credentials),
        authorization_code=_generate_flow(flows.authorization_code),
    )


def _generate_flow(flow: OAuthFlowConfig | None) -> OAuthFlow | None:
    if flow is None:
        return None
    return OAuthFlow(
        authorization_url=flow.authorization_url,
        token_url=flow.token_url,
        refresh_url=flow.refresh_url,
        scopes=dict(flow.scopes) if flow.scopes is not None else None,
    )
