"""
Plain text extraction for the document formats DirSearch can index.

Formats are looked up by file extension in EXTRACTORS. Each extractor takes a
path and returns the document text, raising DocumentReadError when the file
cannot be read.
"""
import os
from typing import Callable, Dict

from lxml import etree

from ..errors import DocumentReadError, UnsupportedFormatError

Extractor = Callable[[str], str]


def _xml_parser():
    return etree.XMLParser(resolve_entities=False, no_network=True, recover=True)


def extract_xml_text(path: str) -> str:
    """
    Concatenate every text node of an XML or XHTML file.

    Each fragment is followed by a single space so that text from adjacent
    elements never merges into one token. Whitespace-only fragments are dropped.

    Args:
        path: Path to the XML file

    Returns:
        Extracted text
    """
    try:
        tree = etree.parse(path, _xml_parser())
    except (OSError, etree.LxmlError) as e:
        raise DocumentReadError(path, f"failed to parse XML: {e}") from e

    root = tree.getroot()
    if root is None:
        raise DocumentReadError(path, "no XML content")

    fragments = []
    for node in root.iter():
        # Comments, processing instructions and unresolved entities have a
        # non-string tag; only their tail belongs to the document text
        if isinstance(node.tag, str) and node.text and node.text.strip():
            fragments.append(node.text)
        if node is not root and node.tail and node.tail.strip():
            fragments.append(node.tail)

    return "".join(fragment + " " for fragment in fragments)


def extract_plain_text(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(path, f"failed to read file: {e}") from e


EXTRACTORS: Dict[str, Extractor] = {
    ".xml": extract_xml_text,
    ".xhtml": extract_xml_text,
    ".txt": extract_plain_text,
}


def register_extractor(extension: str, extractor: Extractor) -> None:
    """
    Register a text extractor for a file extension.

    Args:
        extension: Extension including the leading dot, e.g. ".md"
        extractor: Callable taking a path and returning its text
    """
    EXTRACTORS[extension.lower()] = extractor


def read_document(path: str) -> str:
    """
    Read a document and return its plain text.

    Args:
        path: Path to the document

    Returns:
        Extracted text

    Raises:
        UnsupportedFormatError: If no extractor handles the file extension
        DocumentReadError: If the file cannot be read or parsed
    """
    extension = os.path.splitext(path)[1].lower()
    extractor = EXTRACTORS.get(extension)

    if extractor is None:
        raise UnsupportedFormatError(path, f"unrecognised filetype: {extension or '<none>'}")

    return extractor(path)
