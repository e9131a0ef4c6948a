"""Serialize a generated document to JSON or YAML text."""

import json
from pathlib import Path

import yaml

from openapi_docgen.model.document import Document


def detect_format(file_path: Path | None) -> str:
    """Pick the output format from the file suffix.

    Returns: 'json' or 'yaml'.
    """
    if file_path is not None and file_path.suffix.lower() == ".json":
        return "json"
    return "yaml"


def render_document(document: Document, fmt: str) -> str:
    data = document.to_dict()
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
