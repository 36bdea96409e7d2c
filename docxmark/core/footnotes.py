"""
Builds the footnote table from the footnotes part.
"""
import logging

from lxml import etree

from .docx_to_markdown_converter import DocxToMarkdownConverter
from ..utils import xml_utils as xu
from ..utils.errors import MissingAttributeError
from ..utils.structures import PartNames


log = logging.getLogger("docxmark")

# Word writes its separator and continuation-separator as footnotes -1 and 0
RESERVED_FOOTNOTE_IDS = frozenset({"-1", "0"})


def extract_footnotes(footnotes_root: etree._Element | None,
                      converter: DocxToMarkdownConverter) -> dict[str, str]:
    """
    Converts every footnote to markup and returns a {footnote id: text} table.

    A missing footnotes part yields an empty table.
    """
    footnotes: dict[str, str] = {}
    if footnotes_root is None:
        return footnotes

    for footnote in xu.elem_xpath(footnotes_root, '//w:footnote'):
        footnote_id = xu.get_attr(footnote, 'id')
        if footnote_id is None:
            raise MissingAttributeError('footnote', 'id', part=PartNames.FOOTNOTES)
        if footnote_id in RESERVED_FOOTNOTE_IDS:
            continue
        footnotes[footnote_id] = converter.convert(footnote).strip()

    log.debug(f"Extracted {len(footnotes)} footnotes.")
    return footnotes
