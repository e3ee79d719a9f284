"""Thin navigation layer over lxml elements.

Report readers only see `XmlElement`, so the format logic stays free of
lxml types. Lookups use local names: namespaces are ignored.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from lxml import etree


@dataclass(frozen=True)
class XmlElement:
    """Read-only view of a single XML element."""

    element: etree._Element

    @property
    def name(self) -> str:
        """Local name of the element, without namespace."""
        return etree.QName(self.element).localname

    @property
    def value(self) -> str:
        """Text content of the element and all its descendants."""
        return "".join(self.element.itertext())

    def get_attribute(self, name: str) -> str | None:
        """Return the attribute value, or None if it is not set."""
        return self.element.get(name)

    def get_first(self, name: str) -> "XmlElement | None":
        """Return the first child element with the given local name."""
        return next(self.get(name), None)

    def get(self, name: str) -> Iterator["XmlElement"]:
        """Iterate over child elements with the given local name in document order."""
        for child in self.element:
            # Comments and processing instructions have a non-string tag
            if isinstance(child.tag, str) and etree.QName(child).localname == name:
                yield XmlElement(child)


def parse_document(path: Path, huge_tree: bool = False) -> XmlElement:
    """Parse an XML file and return its root element.

    Raises:
        lxml.etree.XMLSyntaxError: If the document is not well-formed
        OSError: If the file cannot be read

    """
    parser = etree.XMLParser(
        huge_tree=huge_tree,
        resolve_entities=False,
        no_network=True,
    )
    tree = etree.parse(str(path), parser=parser)
    return XmlElement(tree.getroot())
