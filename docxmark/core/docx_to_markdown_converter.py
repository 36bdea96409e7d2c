"""
Handles the conversion of WordprocessingML elements to kramdown markup.
"""
import logging
import posixpath
import re
from enum import Enum, auto

from lxml import etree

from .image_extractor import ImageExtractor
from ..utils import xml_utils as xu
from ..utils.errors import MissingAttributeError, MissingReferenceError
from ..utils.namespaces import Namespaces as NS
from ..utils.structures import PartNames


log = logging.getLogger("docxmark")


class NodeKind(Enum):
    """The element kinds the converter knows about. Everything else is OTHER."""
    CONTAINER = auto()
    PARAGRAPH = auto()
    PARAGRAPH_PROPERTIES = auto()
    PARAGRAPH_STYLE = auto()
    RUN = auto()
    TEXT = auto()
    FOOTNOTE_REFERENCE = auto()
    TABLE = auto()
    TABLE_ROW = auto()
    DRAWING = auto()
    IGNORABLE = auto()
    OTHER = auto()


KIND_MAP: dict[str, NodeKind] = {
    'document': NodeKind.CONTAINER,
    'body': NodeKind.CONTAINER,
    'p': NodeKind.PARAGRAPH,
    'pPr': NodeKind.PARAGRAPH_PROPERTIES,
    'pStyle': NodeKind.PARAGRAPH_STYLE,
    'r': NodeKind.RUN,
    't': NodeKind.TEXT,
    'footnoteReference': NodeKind.FOOTNOTE_REFERENCE,
    'tbl': NodeKind.TABLE,
    'tr': NodeKind.TABLE_ROW,
    'drawing': NodeKind.DRAWING,
    'proofErr': NodeKind.IGNORABLE,
    # formatting is read through the run's lookahead, never by visiting rPr
    'rPr': NodeKind.IGNORABLE,
}


def classify(element: etree._Element) -> NodeKind:
    """Returns the NodeKind of an element by its local tag name."""
    return KIND_MAP.get(xu.get_tag_name(element), NodeKind.OTHER)


# Paragraph style name -> markup prefix
STYLE_PREFIXES: dict[str, str] = {
    'Title': "{: .class = 'title' }\n# ",
    'Heading1': "# ",
    'Heading2': "## ",
    'Quote': "> ",
}

# Direct formatting (first child of <w:rPr>) -> (prefix, postfix)
RUN_FORMATS: dict[str, tuple[str, str]] = {
    'b': ("**", "**"),
    'i': ("*", "*"),
    'smallCaps': (" name(", ")"),
}

# Character styles carry no xml:space="preserve", so the spaces around them
# have to be put back by the markup.
STRONG_FORMAT = (" **", "** ")
EMPHASIS_FORMAT = (" *", "* ")
EMPHASIS_STYLE = re.compile(r"Emph")   # 'Emphasis', 'Emphaseitaliques', ...
NO_FORMAT = ("", "")

LINE_BREAK = "  \n"
PAGE_BREAK = "<br style='page-break-before:always;'>"


class DocxToMarkdownConverter:
    """
    Transforms a WordprocessingML element tree into kramdown text.

    Dispatch is a shallow handler map keyed by NodeKind: each handler decides
    on its own whether to descend. Elements of kind OTHER produce no text and
    their subtree is not visited; their tag names are collected in
    `dropped_kinds`.
    """

    def __init__(self, relationships: dict[str, str], image_extractor: ImageExtractor):
        """
        Args:
            relationships: relationship id -> target map of the document part.
            image_extractor: used to write embedded images and name them.
        """
        self.relationships = relationships
        self.image_extractor = image_extractor
        self._dropped: dict[str, int] = {}

        self._handler_map = {
            NodeKind.CONTAINER: self.convert,
            NodeKind.PARAGRAPH: self._handle_paragraph,
            NodeKind.PARAGRAPH_PROPERTIES: self.convert,
            NodeKind.PARAGRAPH_STYLE: self._handle_paragraph_style,
            NodeKind.RUN: self._handle_run,
            NodeKind.TEXT: self._handle_text,
            NodeKind.FOOTNOTE_REFERENCE: self._handle_footnote_reference,
            NodeKind.TABLE: self.convert,
            NodeKind.TABLE_ROW: self._handle_table_row,
            NodeKind.DRAWING: self._handle_drawing,
            NodeKind.IGNORABLE: self._handle_ignored,
            NodeKind.OTHER: self._handle_other,
        }


    @property
    def dropped_kinds(self) -> list[str]:
        """Tag names skipped so far, in order of first appearance."""
        return list(self._dropped)


    def convert(self, node: etree._Element) -> str:
        """Converts the children of `node` in document order and concatenates the result."""
        output = []
        for child in node:
            handler = self._handler_map[classify(child)]
            output.append(handler(child))
        return "".join(output)


    # --- BLOCK HANDLERS ---

    def _handle_paragraph(self, element: etree._Element) -> str:
        # kramdown separates paragraphs by an empty line
        return self.convert(element) + "\n\n"


    def _handle_paragraph_style(self, element: etree._Element) -> str:
        style = xu.get_attr(element, 'val')
        return STYLE_PREFIXES.get(style or '', "")


    def _handle_table_row(self, element: etree._Element) -> str:
        """Renders every paragraph below the row, however deeply nested, as one cell."""
        cells = [self.convert(p) for p in xu.elem_xpath(element, './/w:p')]
        return "|" + "|".join(cells) + "|\n"


    def _handle_drawing(self, element: etree._Element) -> str:
        blips = xu.elem_xpath(element, './/a:blip', NS.A_MAP)
        if not blips:
            raise MissingReferenceError(None, "Drawing contains no image reference (a:blip)")

        image_id = xu.get_attr(blips[0], 'embed')
        if image_id is None:
            raise MissingAttributeError('blip', 'embed', part=PartNames.DOCUMENT)

        target = self.relationships.get(image_id)
        if target is None:
            raise MissingReferenceError(image_id)

        # targets are relative to word/, unless absolute within the package
        if target.startswith('/'):
            zip_path = target.lstrip('/')
        else:
            zip_path = posixpath.normpath(posixpath.join(PartNames.WORD_DIR, target))

        reference = self.image_extractor.extract(zip_path)
        return f"![]({reference})\n"


    # --- INLINE HANDLERS ---

    def _handle_run(self, element: etree._Element) -> str:
        """
        Word runs are flat: the formatting of a run is declared by its first
        child, so the run is inspected two levels deep before descending.
        Only one format per run is honoured.
        """
        first_child = xu.first_child(element)
        if first_child is None:
            return self.convert(element)

        tag = xu.get_tag_name(first_child)
        if tag == 'rPr':
            prefix, postfix = self._run_format(first_child)
            return prefix + self.convert(element) + postfix

        if tag == 'br':
            if xu.get_attr(first_child, 'type') == 'page':
                return PAGE_BREAK
            return LINE_BREAK

        return self.convert(element)


    def _run_format(self, run_properties: etree._Element) -> tuple[str, str]:
        """Returns the (prefix, postfix) pair for the first formatting child of <w:rPr>."""
        format_node = xu.first_child(run_properties)
        if format_node is None:
            return NO_FORMAT

        tag = xu.get_tag_name(format_node)
        if tag == 'rStyle':
            style = xu.get_attr(format_node, 'val') or ''
            if style == 'Strong':
                return STRONG_FORMAT
            if EMPHASIS_STYLE.search(style):
                return EMPHASIS_FORMAT
            return NO_FORMAT

        return RUN_FORMATS.get(tag, NO_FORMAT)


    def _handle_text(self, element: etree._Element) -> str:
        return element.text or ""


    def _handle_footnote_reference(self, element: etree._Element) -> str:
        footnote_id = xu.get_attr(element, 'id')
        if footnote_id is None:
            raise MissingAttributeError('footnoteReference', 'id', part=PartNames.DOCUMENT)
        return f"[^{footnote_id}]"


    # --- SKIPPED ELEMENTS ---

    def _handle_ignored(self, element: etree._Element) -> str:
        return ""


    def _handle_other(self, element: etree._Element) -> str:
        tag = xu.get_tag_name(element)
        if tag:
            if tag not in self._dropped:
                log.debug(f"Skipping unhandled element <{tag}> and its content.")
            self._dropped[tag] = self._dropped.get(tag, 0) + 1
        return ""
