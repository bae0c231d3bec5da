"""Domain error hierarchy."""

from __future__ import annotations


class EnricherError(RuntimeError):
    """Base class for errors raised by the enrichment core."""


class StructuralError(EnricherError):
    """Raised when a batch node turns up as the child of another node."""

    def __init__(self, child_name: str, parent_name: str) -> None:
        super().__init__(
            f"Unexpectedly found a batch node {child_name!r} as the child of {parent_name!r}"
        )
        self.child_name = child_name
        self.parent_name = parent_name


class MalformedDocumentError(EnricherError):
    """Raised when an RDF/XML document cannot be parsed or has no single description."""


class SerializationError(EnricherError):
    """Raised when a merged RDF/XML document cannot be rendered back to text."""


class SessionClosedError(EnricherError):
    """Raised when a closed RELS-EXT session is used again."""


class RepositoryError(EnricherError):
    """Raised by a datastream repository when a read or write fails."""
