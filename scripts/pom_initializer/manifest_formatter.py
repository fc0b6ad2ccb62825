"""Canonical, diff-stable formatting of generated ``pom.xml`` text.

The pipeline parses the text (comments kept), drops whitespace-only text
between elements, re-indents with four spaces and then applies the textual
layout rules in ``LAYOUT_RULES`` in order. Every rule is idempotent, and the
parse step discards any layout from a previous pass, so formatting already
formatted text is a no-op.

Only layout changes. Namespace prefixes and ``xmlns`` declarations are
written back exactly as the input declared them, and comments, processing
instructions and a DOCTYPE before or after the root element are kept.
"""

import re
import xml.etree.ElementTree as ET
from typing import Optional

from .errors import MalformedInputError
from .manifest_document import XML_DECLARATION

INDENT = "    "

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"

# Closing tags followed by exactly one blank line.
BLANK_LINE_AFTER = ("modelVersion", "description", "properties", "dependencies")

MANAGEMENT_SECTION = "dependencyManagement"

# Optional namespace prefix of a closing tag, e.g. "m:" in </m:properties>.
_PREFIX = r"(?:[\w.-]+:)?"


class _DocumentTarget:
    """Parser target that keeps the input's names and the nodes around the root.

    ElementTree reports names as ``{uri}local``. Each one is turned back into
    the ``prefix:local`` form in scope where it appeared, and every namespace
    declaration stays a plain ``xmlns`` attribute of the element that made
    it, so serializing needs no entry in ElementTree's global prefix table.

    Attributes:
        prolog: Comments, processing instructions and the DOCTYPE before the root.
        epilog: Comments and processing instructions after the root.
    """

    def __init__(self):
        self._builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self._scopes = [{XML_NAMESPACE: "xml"}]
        self._declared = []
        self._root_seen = False
        self.prolog = []
        self.epilog = []

    def _inside_root(self) -> bool:
        return len(self._scopes) > 1

    def _outside(self) -> list:
        return self.epilog if self._root_seen else self.prolog

    def _qualify(self, name: str) -> str:
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        prefix = self._scopes[-1].get(uri)
        return f"{prefix}:{local}" if prefix else local

    def start_ns(self, prefix, uri):
        self._declared.append((prefix or "", uri))

    def start(self, tag, attrib):
        scope = dict(self._scopes[-1])
        attributes = {}
        for prefix, uri in self._declared:
            # A rebound prefix no longer names the namespace it used to.
            for stale in [u for u, p in scope.items() if p == prefix]:
                del scope[stale]
            scope[uri] = prefix
            attributes[f"xmlns:{prefix}" if prefix else "xmlns"] = uri
        self._declared = []
        self._scopes.append(scope)
        self._root_seen = True
        for name, value in (attrib or {}).items():
            attributes[self._qualify(name)] = value
        return self._builder.start(self._qualify(tag), attributes)

    def end(self, tag):
        element = self._builder.end(self._qualify(tag))
        self._scopes.pop()
        return element

    def data(self, text):
        if self._inside_root():
            self._builder.data(text)

    def comment(self, text):
        if self._inside_root():
            return self._builder.comment(text)
        self._outside().append(ET.Comment(text))

    def pi(self, target, text=None):
        if self._inside_root():
            return self._builder.pi(target, text)
        self._outside().append(ET.ProcessingInstruction(target, text))

    def doctype(self, name, pubid, system):
        if pubid:
            self.prolog.append(f'<!DOCTYPE {name} PUBLIC "{pubid}" "{system}">')
        elif system:
            self.prolog.append(f'<!DOCTYPE {name} SYSTEM "{system}">')
        else:
            self.prolog.append(f"<!DOCTYPE {name}>")

    def close(self) -> ET.Element:
        return self._builder.close()


def _parse(xml: str) -> tuple:
    """Parse a whole document.

    Returns:
        ``(prolog, root, epilog)``.
    """
    target = _DocumentTarget()
    parser = ET.XMLParser(target=target)
    try:
        parser.feed(xml)
        root = parser.close()
    except ET.ParseError as exc:
        raise MalformedInputError(f"Invalid XML content: {exc}") from exc
    return target.prolog, root, target.epilog


def _serialize(node) -> str:
    if isinstance(node, str):
        return node
    return ET.tostring(node, encoding="unicode")


def strip_whitespace(root: ET.Element) -> ET.Element:
    """Rule 1: drop whitespace-only text and tails everywhere in the tree."""
    for el in root.iter():
        if el.text is not None and not el.text.strip():
            el.text = None
        if el.tail is not None and not el.tail.strip():
            el.tail = None
    return root


def reindent(root: ET.Element) -> ET.Element:
    """Rule 2: indent nested elements with a fixed four-space step."""
    ET.indent(root, space=INDENT)
    return root


def root_tag_on_own_line(xml: str) -> str:
    """Rule 3: put the ``<project ...>`` opening tag on its own line."""
    return re.sub(r"^(<\?xml[^>]*\?>)[ \t]*(?=<)", r"\1\n", xml, count=1)


def blank_line_after_sections(xml: str) -> str:
    """Rule 4: exactly one blank line after each closing tag in ``BLANK_LINE_AFTER``."""
    for tag in BLANK_LINE_AFTER:
        xml = re.sub(rf"(</{_PREFIX}{re.escape(tag)}>)\n(?:[ \t]*\n)*", r"\1\n\n", xml)
    return xml


def tidy_management_section(xml: str) -> str:
    """Rule 5: no blank line before ``</dependencyManagement>``, one after it."""
    closing = rf"</{_PREFIX}{MANAGEMENT_SECTION}>"
    xml = re.sub(rf"\n(?:[ \t]*\n)+([ \t]*{closing})", r"\n\1", xml)
    xml = re.sub(rf"({closing})\n(?:[ \t]*\n)*", r"\1\n\n", xml)
    return xml


# Ordered textual rules applied after serialization.
LAYOUT_RULES = (
    root_tag_on_own_line,
    blank_line_after_sections,
    tidy_management_section,
)


def format_xml(xml: Optional[str]) -> str:
    """Format XML text into the canonical manifest layout.

    Args:
        xml: Well-formed XML, with or without an XML declaration.

    Returns:
        Formatted text with an XML declaration and a trailing newline.

    Raises:
        ValueError: If the input is empty or blank.
        MalformedInputError: If the input is not well-formed XML.
    """
    if xml is None or not xml.strip():
        raise ValueError("Input source cannot be empty")

    prolog, root, epilog = _parse(xml.strip())
    root = reindent(strip_whitespace(root))
    body = "\n".join(_serialize(node) for node in [*prolog, root, *epilog])
    formatted = XML_DECLARATION + body
    for rule in LAYOUT_RULES:
        formatted = rule(formatted)
    return formatted.rstrip("\n") + "\n"
