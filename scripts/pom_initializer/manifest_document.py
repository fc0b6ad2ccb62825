"""In-memory build descriptor tree with idempotent editing primitives.

All mutation of a manifest goes through ``ManifestDocument``. Container
sections are reached with ``find_or_create_section`` and repeated entries
(``<dependency>``, ``<plugin>``) are written with ``upsert_repeatable_entry``,
so touching the same section or coordinate twice never duplicates it.
"""

import xml.etree.ElementTree as ET
from typing import Callable, Optional

from .pom_models import Coordinate, ManifestNode

POM_NAMESPACE = "http://maven.apache.org/POM/4.0.0"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"
POM_SCHEMA_LOCATION = f"{POM_NAMESPACE} https://maven.apache.org/xsd/maven-4.0.0.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

# Attributes of a standard Maven 4.0.0 <project> root.
POM_ROOT_ATTRIBUTES = {
    "xmlns": POM_NAMESPACE,
    "xmlns:xsi": XSI_NAMESPACE,
    "xsi:schemaLocation": POM_SCHEMA_LOCATION,
}


def matches_coordinate(group_id: str, artifact_id: str) -> Callable[[ManifestNode], bool]:
    """Build a predicate matching entries whose groupId and artifactId are given."""
    def _match(node: ManifestNode) -> bool:
        return (node.child_text("groupId") == group_id
                and node.child_text("artifactId") == artifact_id)
    return _match


class ManifestDocument:
    """A mutable manifest tree with a single root element.

    Attributes:
        root: The root node, or ``None`` until ``create_root`` is called.
    """

    def __init__(self, root: Optional[ManifestNode] = None):
        self.root = root

    @classmethod
    def create_pom(cls) -> "ManifestDocument":
        """Return a document holding an empty, namespaced ``<project>`` root."""
        doc = cls()
        doc.create_root("project", POM_ROOT_ATTRIBUTES)
        return doc

    def create_root(self, name: str, attributes: Optional[dict] = None) -> ManifestNode:
        if self.root is not None:
            raise RuntimeError(f"Document already has a root element <{self.root.name}>")
        self.root = ManifestNode(name=name, attributes=dict(attributes or {}))
        return self.root

    # ── Lookup ──

    @staticmethod
    def find_child(parent: ManifestNode, name: str) -> Optional[ManifestNode]:
        """Return the first direct child named ``name``, or ``None``."""
        for child in parent.children:
            if child.name == name:
                return child
        return None

    @staticmethod
    def find_children(parent: ManifestNode, name: str) -> list:
        return [child for child in parent.children if child.name == name]

    def find_entry(self, container: ManifestNode, entry_name: str,
                   match: Callable[[ManifestNode], bool]) -> Optional[ManifestNode]:
        """Return the first ``entry_name`` child of ``container`` accepted by ``match``."""
        for child in self.find_children(container, entry_name):
            if match(child):
                return child
        return None

    def find_path(self, *names: str) -> Optional[ManifestNode]:
        """Walk down from the root by child names, e.g. ``find_path("build", "plugins")``."""
        node = self.root
        for name in names:
            if node is None:
                return None
            node = self.find_child(node, name)
        return node

    # ── Mutation ──

    @staticmethod
    def insert_child(parent: ManifestNode, name: str, text: Optional[str] = None) -> ManifestNode:
        """Append a new child. Does not check for an existing one."""
        node = ManifestNode(name=name, text=text)
        parent.children.append(node)
        return node

    def find_or_create_section(self, parent: ManifestNode, name: str) -> ManifestNode:
        """Return the child section ``name``, appending it first if absent."""
        section = self.find_child(parent, name)
        if section is None:
            section = self.insert_child(parent, name)
        return section

    def set_child_text(self, parent: ManifestNode, name: str, text: str,
                       after: Optional[str] = None) -> ManifestNode:
        """Set the text of child ``name``, creating the child if needed.

        A newly created child goes right after the sibling named ``after``
        when there is one, otherwise at the end.
        """
        node = self.find_child(parent, name)
        if node is None:
            node = ManifestNode(name=name)
            anchor = self.find_child(parent, after) if after else None
            if anchor is None:
                parent.children.append(node)
            else:
                parent.children.insert(parent.children.index(anchor) + 1, node)
        node.text = text
        return node

    def remove_child(self, parent: ManifestNode, name: str) -> bool:
        """Remove the first child named ``name``. Returns whether one was removed."""
        node = self.find_child(parent, name)
        if node is None:
            return False
        parent.children.remove(node)
        return True

    def upsert_repeatable_entry(
        self,
        container: ManifestNode,
        entry_name: str,
        match: Callable[[ManifestNode], bool],
        build: Callable[[ManifestNode], None],
    ) -> ManifestNode:
        """Update a matching entry in place, or append and build a new one.

        ``build`` receives the entry node and should write its fields with
        ``set_child_text`` so a second upsert overwrites the first one's
        values instead of adding elements.

        Args:
            container: Section holding the entries (e.g. ``<plugins>``).
            entry_name: Tag of each entry (e.g. ``plugin``).
            match: Predicate identifying the entry to update.
            build: Callback populating the entry.

        Returns:
            The updated or newly appended entry.
        """
        entry = self.find_entry(container, entry_name, match)
        if entry is None:
            entry = self.insert_child(container, entry_name)
        build(entry)
        return entry

    def upsert_coordinate_entry(
        self,
        container: ManifestNode,
        entry_name: str,
        coordinate: Coordinate,
        version: Optional[str] = None,
        extra: Optional[dict] = None,
    ) -> ManifestNode:
        """Upsert an entry keyed by groupId/artifactId.

        Writes ``groupId``, ``artifactId``, then ``version`` (left out when
        ``None``), then each ``extra`` field in order. Text fields an earlier
        upsert wrote but this one does not are removed; nested sections such
        as ``<executions>`` are kept.
        """
        fields = {"groupId": coordinate.group_id, "artifactId": coordinate.artifact_id}
        if version is not None:
            fields["version"] = version
        fields.update(extra or {})

        def _build(entry: ManifestNode):
            stale = [c.name for c in entry.children if c.text is not None and c.name not in fields]
            for name in stale:
                self.remove_child(entry, name)
            previous = None
            for name, text in fields.items():
                self.set_child_text(entry, name, text, after=previous)
                previous = name

        return self.upsert_repeatable_entry(
            container, entry_name,
            matches_coordinate(coordinate.group_id, coordinate.artifact_id),
            _build,
        )

    @staticmethod
    def add_comment(node: ManifestNode, comment: str):
        """Annotate a node with a comment, once."""
        if comment not in node.comments:
            node.comments.append(comment)

    # ── Serialization ──

    def to_element(self) -> ET.Element:
        """Convert the tree to an ElementTree element.

        Raises:
            RuntimeError: If the document has no root.
        """
        if self.root is None:
            raise RuntimeError("Cannot serialize a manifest without a root element")
        return _to_element(self.root)

    def to_xml(self) -> str:
        """Serialize to compact XML text with an XML declaration (unformatted)."""
        body = ET.tostring(self.to_element(), encoding="unicode")
        return XML_DECLARATION + body


def _to_element(node: ManifestNode, parent: Optional[ET.Element] = None) -> ET.Element:
    if parent is None:
        el = ET.Element(node.name, dict(node.attributes))
    else:
        el = ET.SubElement(parent, node.name, dict(node.attributes))
    for comment in node.comments:
        el.append(ET.Comment(f" {comment} "))
    if node.text is not None:
        el.text = node.text
    for child in node.children:
        _to_element(child, el)
    return el
