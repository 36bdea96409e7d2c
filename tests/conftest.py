"""Shared fixtures: WordprocessingML snippets, small .docx packages and image bytes."""

import zipfile
from io import BytesIO
from pathlib import Path
from unittest.mock import Mock

import pytest
from lxml import etree
from PIL import Image

from docxmark.utils.namespaces import Namespaces as NS
from docxmark.utils.structures import PartNames


NSDECL = (
    f'xmlns:w="{NS.W}" xmlns:r="{NS.R}" xmlns:a="{NS.A}" '
    f'xmlns:wp="{NS.WP}" xmlns:pic="{NS.PIC}"'
)

RELS_TEMPLATE = f'<Relationships xmlns="{NS.PKG_REL}">{{}}</Relationships>'
IMAGE_REL_TYPE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"


def document_xml(body: str) -> str:
    return f'<w:document {NSDECL}><w:body>{body}</w:body></w:document>'


def footnotes_xml(footnotes: str) -> str:
    return f'<w:footnotes {NSDECL}>{footnotes}</w:footnotes>'


def relationships_xml(targets: dict[str, str]) -> str:
    rels = "".join(
        f'<Relationship Id="{rel_id}" Type="{IMAGE_REL_TYPE}" Target="{target}"/>'
        for rel_id, target in targets.items()
    )
    return RELS_TEMPLATE.format(rels)


def parse_document(body: str) -> etree._Element:
    """Returns the <w:document> root for a body snippet."""
    return etree.fromstring(document_xml(body))


def parse_element(snippet: str) -> etree._Element:
    """Parses a single w: element snippet and returns it."""
    return parse_document(snippet).find(f'{{{NS.W}}}body')[0]


def paragraph(text: str, style: str | None = None) -> str:
    ppr = f'<w:pPr><w:pStyle w:val="{style}"/></w:pPr>' if style else ''
    return f'<w:p>{ppr}<w:r><w:t xml:space="preserve">{text}</w:t></w:r></w:p>'


def drawing_run(rel_id: str) -> str:
    return (
        '<w:r><w:drawing><wp:inline><a:graphic><a:graphicData><pic:pic>'
        f'<pic:blipFill><a:blip r:embed="{rel_id}"/></pic:blipFill>'
        '</pic:pic></a:graphicData></a:graphic></wp:inline></w:drawing></w:r>'
    )


def image_bytes(size=(100, 50), fmt="PNG", mode="RGB") -> bytes:
    with BytesIO() as output:
        Image.new(mode, size, "red" if mode == "RGB" else None).save(output, format=fmt)
        return output.getvalue()


@pytest.fixture
def image_extractor():
    """Stands in for ImageExtractor; returns `images/<stem>.jpg` references."""
    extractor = Mock()
    extractor.extract.side_effect = lambda zip_path: "images/" + Path(zip_path).stem + ".jpg"
    return extractor


@pytest.fixture
def make_docx(tmp_path):
    """Factory writing a minimal .docx package and returning its path."""

    def _make_docx(body: str, rels: dict[str, str] | None = None,
                   footnotes: str | None = None, media: dict[str, bytes] | None = None,
                   name: str = "sample.docx", include_rels: bool = True,
                   include_document: bool = True) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as zf:
            if include_document:
                zf.writestr(PartNames.DOCUMENT, document_xml(body))
            if include_rels:
                zf.writestr(PartNames.DOCUMENT_RELS, relationships_xml(rels or {}))
            if footnotes is not None:
                zf.writestr(PartNames.FOOTNOTES, footnotes_xml(footnotes))
            for zip_path, data in (media or {}).items():
                zf.writestr(zip_path, data)
        return path

    return _make_docx
