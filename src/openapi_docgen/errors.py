"""Exceptions raised while generating an OpenAPI document.

Generation never returns a partial document: any of these aborts the
whole call.
"""


class DocgenError(Exception):
    """Base class for all generation failures."""


class PreconditionError(DocgenError, ValueError):
    """A required value (usually a type descriptor) is missing."""


class ConfigurationError(DocgenError):
    """The caller supplied inconsistent endpoint or security configuration."""
