"""
Namespace-aware view of an XML element tree.

IP-XACT documents put element names in the ``spirit`` (or ``xilinx``)
namespace and cross-reference attributes in the same namespaces. Parsers
navigate by local name and resolve attribute namespaces through the
prefixes in scope, so they work whatever URI a given schema revision uses.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Union

from lxml import etree

SPIRIT_PREFIX = "spirit"
XILINX_PREFIX = "xilinx"
METADATA_PREFIXES = (SPIRIT_PREFIX, XILINX_PREFIX)

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


class SchemaNode:
    """Read-only wrapper around an ``lxml`` element."""

    __slots__ = ("_element",)

    def __init__(self, element: etree._Element):
        self._element = element

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "SchemaNode":
        """Parse a file and return its root. Raises ``etree.XMLSyntaxError``."""
        tree = etree.parse(str(file_path), _XML_PARSER)
        return cls(tree.getroot())

    @classmethod
    def from_string(cls, text: Union[str, bytes]) -> "SchemaNode":
        """Parse a document held in memory."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return cls(etree.fromstring(text, _XML_PARSER))

    @property
    def label(self) -> str:
        """Element name without namespace."""
        return etree.QName(self._element).localname

    @property
    def text(self) -> str:
        """All text content below this node, stripped."""
        return "".join(self._element.itertext()).strip()

    @property
    def line(self) -> Optional[int]:
        return self._element.sourceline

    def children(self, label: Optional[str] = None) -> List["SchemaNode"]:
        """Direct child elements, optionally only those with a given local name."""
        result = []
        for child in self._element:
            if not isinstance(child.tag, str):
                continue
            node = SchemaNode(child)
            if label is None or node.label == label:
                result.append(node)
        return result

    def child(self, label: str) -> Optional["SchemaNode"]:
        """First direct child with the given local name."""
        return next(iter(self.children(label)), None)

    def child_text(self, label: str) -> Optional[str]:
        """Text of the first child with the given local name, or None if absent."""
        node = self.child(label)
        return node.text if node is not None else None

    def path(self, *labels: str) -> List["SchemaNode"]:
        """All nodes reached by following ``labels`` one level at a time."""
        nodes = [self]
        for label in labels:
            nodes = [c for n in nodes for c in n.children(label)]
        return nodes

    def namespace_uri(self, prefix: str) -> Optional[str]:
        """URI bound to ``prefix`` in this element's scope."""
        return self._element.nsmap.get(prefix)

    def declares_any(self, prefixes=METADATA_PREFIXES) -> bool:
        """Check whether any of the prefixes is bound in scope."""
        return any(self.namespace_uri(p) is not None for p in prefixes)

    def attr(self, prefix: str, name: str) -> Optional[str]:
        """Namespace-qualified attribute value, or None."""
        uri = self.namespace_uri(prefix)
        if uri is None:
            return None
        return self._element.get(f"{{{uri}}}{name}")

    def __iter__(self) -> Iterator["SchemaNode"]:
        return iter(self.children())

    def __repr__(self) -> str:
        return f"SchemaNode({self.label!r}, line={self.line})"
