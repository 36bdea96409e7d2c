from typing import NamedTuple

__all__ = ["ParsedDocument", "PartNames", "FNames"]


class ParsedDocument(NamedTuple):
    """Output of parsing one package: body markup plus the footnote table."""
    content: str
    footnote_definitions: dict[str, str]
    dropped_kinds: tuple[str, ...] = ()


class PartNames:
    """Entries of the .docx package the converter reads."""
    DOCUMENT: str = 'word/document.xml'
    FOOTNOTES: str = 'word/footnotes.xml'
    DOCUMENT_RELS: str = 'word/_rels/document.xml.rels'
    # relationship targets are relative to this folder
    WORD_DIR: str = 'word'


class FNames:
    """File name patterns the Renderer writes."""
    CHAPTER: str = '{index:02d}.chapter{index:02d}.{lang}.page'
    SINGLE: str = '01.chapter01.{lang}.page'
    HTML_EXT: str = 'html'
    LATEX_EXT: str = 'tex'
