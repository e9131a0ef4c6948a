"""CLI entry point for openapi-docgen."""

import logging
from pathlib import Path

import click
from pydantic import ValidationError

from openapi_docgen.config import ServerConfig
from openapi_docgen.descriptor.manifest import Manifest, load_manifest
from openapi_docgen.errors import DocgenError
from openapi_docgen.generator.document import generate_document
from openapi_docgen.model.document import Document
from openapi_docgen.render import detect_format, render_document


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(manifest_path: Path) -> Manifest:
    try:
        return load_manifest(manifest_path)
    except (DocgenError, ValidationError) as e:
        raise click.ClickException(str(e)) from e


def _generate(manifest: Manifest) -> Document:
    try:
        return generate_document(manifest.document_info, manifest.endpoints)
    except (DocgenError, ValidationError) as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose: bool):
    """openapi-docgen — generate OpenAPI documents from endpoint manifests."""
    _configure_logging(verbose)


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(dir_okay=False, path_type=Path), help="Output file. Prints to stdout when omitted.")
@click.option("--format", "fmt", default="auto", type=click.Choice(["auto", "json", "yaml"]), help="Output format; auto picks by output suffix.")
@click.option("--server", "servers", multiple=True, help="Server URL to add to the document (repeatable).")
def generate(manifest_path: Path, output: Path | None, fmt: str, servers: tuple[str, ...]):
    """Generate an OpenAPI document from a manifest."""
    manifest = _load(manifest_path)
    if servers:
        existing = list(manifest.document_info.servers or [])
        existing.extend(ServerConfig(url=url) for url in servers)
        manifest.document_info.servers = existing

    document = _generate(manifest)
    if fmt == "auto":
        fmt = detect_format(output)
    text = render_document(document, fmt)

    if output is None:
        click.echo(text, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    click.echo(
        f"Wrote {len(document.paths)} paths and {len(document.components.schemas)} schemas to {output}",
        err=True,
    )


@main.command()
@click.argument("manifest_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(manifest_path: Path):
    """Show the operations and schemas a manifest would produce."""
    manifest = _load(manifest_path)
    document = _generate(manifest)

    click.echo(f"{document.info.title} {document.info.version}")
    click.echo(f"Paths ({len(document.paths)}):")
    for path, item in document.paths.items():
        for method, operation in item.operations().items():
            name = f"  [{operation.operation_id}]" if operation.operation_id else ""
            click.echo(f"  {method.upper():7} {path}{name}")
    click.echo(f"Schemas ({len(document.components.schemas)}):")
    for name in document.components.schemas:
        click.echo(f"  {name}")
    schemes = document.components.security_schemes or {}
    if schemes:
        click.echo(f"Security schemes ({len(schemes)}):")
        for name, scheme in schemes.items():
            click.echo(f"  {name} ({scheme.type})")
