"""In-memory editing of RELS-EXT (external relations) RDF/XML datastreams.

A :class:`RelsExtDocument` is a one-shot session around a single datastream:
parse it, add relations, serialize it. Each relation is an RDF triple whose
subject is the document's ``rdf:Description`` and whose object is another
Fedora object, rendered as::

    <hasPage xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#"
             xmlns="info:fedora/fedora-system:def/relations-external#"
             rdf:resource="info:fedora/uuid:..."/>

Adding the same (predicate, object) pair twice never produces two elements.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Final
from xml.sax.saxutils import escape

from lxml import etree

from domsenricher.domain.errors import (
    MalformedDocumentError,
    SerializationError,
    SessionClosedError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

log = getLogger(__name__)

RDF_NS: Final[str] = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
MODEL_NS: Final[str] = "info:fedora/fedora-system:def/model#"
RELS_EXT_NS: Final[str] = "info:fedora/fedora-system:def/relations-external#"
DOMS_RELATIONS_NS: Final[str] = "http://doms.statsbiblioteket.dk/relations/default/0/1/#"

FEDORA_URI_PREFIX: Final[str] = "info:fedora/"
HAS_MODEL: Final[str] = "hasModel"

_NCNAME = re.compile(r"[^\W\d][\w.\-]*")
_ATTRIBUTE_ENTITIES = {'"': "&quot;"}
_RDF_RESOURCE = f"{{{RDF_NS}}}resource"


def _new_parser(encoding: str | None = None) -> etree.XMLParser:
    return etree.XMLParser(encoding=encoding, resolve_entities=False, no_network=True)


@dataclass(frozen=True, slots=True)
class RelationTriple:
    """One outgoing relation: ``<subject> --namespace#predicate--> info:fedora/<object_pid>``."""

    namespace: str
    predicate: str
    object_pid: str

    def __post_init__(self) -> None:
        if not _NCNAME.fullmatch(self.predicate):
            raise ValueError(f"Invalid relation name: {self.predicate!r}")
        if not self.namespace:
            raise ValueError("Relation namespace must not be empty")

    @property
    def resource(self) -> str:
        return f"{FEDORA_URI_PREFIX}{self.object_pid}"

    def to_fragment(self) -> str:
        namespace = escape(self.namespace, _ATTRIBUTE_ENTITIES)
        resource = escape(self.resource, _ATTRIBUTE_ENTITIES)
        return (
            f'<{self.predicate} xmlns:rdf="{RDF_NS}" '
            f'xmlns="{namespace}" rdf:resource="{resource}"/>'
        )


def content_model(model_pid: str) -> RelationTriple:
    return RelationTriple(MODEL_NS, HAS_MODEL, model_pid)


def external_relation(predicate: str, object_pid: str) -> RelationTriple:
    return RelationTriple(RELS_EXT_NS, predicate, object_pid)


def doms_relation(predicate: str, object_pid: str) -> RelationTriple:
    return RelationTriple(DOMS_RELATIONS_NS, predicate, object_pid)


class RelsExtDocument:
    """Parsed RELS-EXT datastream accepting new relations until serialized."""

    def __init__(self, xml: str | bytes) -> None:
        # A str is already decoded; its XML declaration must not re-decode it.
        if isinstance(xml, str):
            data, parser = xml.encode("utf-8"), _new_parser("utf-8")
        else:
            data, parser = xml, _new_parser()
        try:
            root = etree.fromstring(data, parser)
        except (etree.XMLSyntaxError, ValueError) as exc:
            raise MalformedDocumentError(f"Unable to parse RDF/XML: {exc}") from exc

        descriptions = root.xpath("//rdf:Description", namespaces={"rdf": RDF_NS})
        if len(descriptions) != 1:
            raise MalformedDocumentError(
                f"Expected exactly one rdf:Description element, found {len(descriptions)}"
            )

        self._root = root
        self._description: etree._Element = descriptions[0]
        self._added = 0
        self._closed = False

    @property
    def subject(self) -> str | None:
        """The ``rdf:about`` of the description, if present."""

        return self._description.get(f"{{{RDF_NS}}}about")

    @property
    def added(self) -> int:
        """Number of relations appended during this session."""

        return self._added

    @property
    def closed(self) -> bool:
        return self._closed

    def relations(self) -> tuple[RelationTriple, ...]:
        """Return the Fedora object relations currently held by the description."""

        self._ensure_open()
        found: list[RelationTriple] = []
        for child in self._description.iterchildren(tag=etree.Element):
            resource = child.get(_RDF_RESOURCE)
            if resource is None or not resource.startswith(FEDORA_URI_PREFIX):
                continue
            qname = etree.QName(child)
            if qname.namespace is None:
                continue
            found.append(
                RelationTriple(
                    qname.namespace,
                    qname.localname,
                    resource.removeprefix(FEDORA_URI_PREFIX),
                )
            )
        return tuple(found)

    def contains(self, triple: RelationTriple) -> bool:
        self._ensure_open()
        matches = self._description.xpath(
            f"our:{triple.predicate}[@rdf:resource = $resource]",
            namespaces={"our": triple.namespace, "rdf": RDF_NS},
            resource=triple.resource,
        )
        return bool(matches)

    def add_relation(self, triple: RelationTriple) -> RelsExtDocument:
        """Append ``triple`` to the description unless it is already there."""

        if self.contains(triple):
            log.debug("Skipping existing relation %s -> %s", triple.predicate, triple.resource)
            return self

        try:
            element = etree.fromstring(triple.to_fragment().encode("utf-8"), _new_parser())
        except etree.XMLSyntaxError as exc:
            raise ValueError(f"Cannot build relation fragment for {triple}: {exc}") from exc

        if len(self._description):
            last = self._description[-1]
            element.tail = last.tail
            last.tail = self._description.text
        else:
            element.tail = self._description.text
        self._description.append(element)
        self._added += 1
        return self

    def add_relations(self, triples: Iterable[RelationTriple]) -> RelsExtDocument:
        for triple in triples:
            self.add_relation(triple)
        return self

    def add_content_model(self, model_pid: str) -> RelsExtDocument:
        """Add a content model, e.g. ``"doms:ContentModel_DOMS"``."""

        return self.add_relation(content_model(model_pid))

    def add_external_relation(self, predicate: str, object_pid: str) -> RelsExtDocument:
        """Add a Fedora external relation, e.g. ``hasPart`` -> ``uuid:05d8...``."""

        return self.add_relation(external_relation(predicate, object_pid))

    def add_doms_relation(self, predicate: str, object_pid: str) -> RelsExtDocument:
        """Add a relation in the DOMS relations namespace."""

        return self.add_relation(doms_relation(predicate, object_pid))

    def serialize(self) -> str:
        """Render the document and close the session."""

        self._ensure_open()
        try:
            return etree.tostring(self._root.getroottree(), encoding="unicode")
        except (etree.LxmlError, ValueError, TypeError) as exc:
            raise SerializationError(f"Unable to serialize RELS-EXT document: {exc}") from exc
        finally:
            self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("RELS-EXT document has already been serialized")
