"""Document generator — assembles the complete OpenAPI document.

Two passes: building the paths collects every referenced type, then the
decomposed closure of those types is turned into top-level definitions.
Operations therefore only ever see references, which keeps cyclic type
graphs finite.
"""

import logging

from openapi_docgen.config import DocumentHeader, DocumentInfo, SecuritySchemeConfig
from openapi_docgen.descriptor.endpoint import EndpointInfo
from openapi_docgen.model.document import Components, Contact, Document, Info, License, Server, ServerVariable

from .decompose import decompose_types
from .paths import collect_references
from .schema import UsedTypes, schema_for_type
from .security import generate_security_schemes

logger = logging.getLogger(__name__)


def generate_document(doc_info: DocumentInfo, endpoints: list[EndpointInfo]) -> Document:
    """Generate the document for ``endpoints`` described by ``doc_info``."""
    snapshot = collect_references(endpoints)
    decomposed = decompose_types(snapshot.used_types)
    components = generate_components(decomposed, doc_info.security_schemes, snapshot.used_security_schemes)

    logger.debug(
        "Generated %d paths, %d schemas for %d endpoints",
        len(snapshot.paths),
        len(components.schemas),
        len(endpoints),
    )
    return Document(
        info=generate_info(doc_info.header),
        servers=generate_servers(doc_info),
        paths=snapshot.paths,
        components=components,
    )


def generate_components(
    decomposed_types: UsedTypes,
    security_schemes: dict[str, SecuritySchemeConfig] | None,
    used_security_schemes: list[str],
) -> Components:
    # each definition gets a throwaway registry, the closure already holds every nested type
    schemas = {
        name: schema_for_type(type_, False, {})
        for name, type_ in decomposed_types.items()
    }
    return Components(
        schemas=schemas,
        security_schemes=generate_security_schemes(security_schemes, used_security_schemes),
    )


def generate_info(header: DocumentHeader) -> Info:
    contact = None
    if header.contact_name or header.contact_url or header.contact_email:
        contact = Contact(name=header.contact_name, url=header.contact_url, email=header.contact_email)
    license_ = None
    if header.license_name:
        license_ = License(name=header.license_name, url=header.license_url)
    return Info(
        title=header.title,
        version=header.version,
        description=header.description,
        terms_of_service=header.terms_of_service,
        contact=contact,
        license=license_,
    )


def generate_servers(doc_info: DocumentInfo) -> list[Server] | None:
    if doc_info.servers is None:
        return None
    servers = []
    for server in doc_info.servers:
        variables = None
        if server.variables:
            variables = {
                name: ServerVariable(default=var.default, description=var.description, enum=var.enum)
                for name, var in server.variables.items()
            }
        servers.append(Server(url=server.url, description=server.description, variables=variables))
    return servers
