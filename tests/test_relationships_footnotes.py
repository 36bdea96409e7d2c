import pytest
from lxml import etree

from conftest import footnotes_xml, relationships_xml, RELS_TEMPLATE
from docxmark.core.docx_to_markdown_converter import DocxToMarkdownConverter
from docxmark.core.footnotes import extract_footnotes
from docxmark.core.relationships import parse_relationships
from docxmark.utils.errors import MissingAttributeError


class TestParseRelationships:

    def test_maps_ids_to_targets(self):
        root = etree.fromstring(relationships_xml({"rId1": "styles.xml", "rId5": "media/image1.png"}))
        assert parse_relationships(root) == {"rId1": "styles.xml", "rId5": "media/image1.png"}

    def test_empty(self):
        assert parse_relationships(etree.fromstring(RELS_TEMPLATE.format(""))) == {}

    def test_duplicate_id_last_wins(self):
        rels = '<Relationship Id="rId1" Target="a.png"/><Relationship Id="rId1" Target="b.png"/>'
        assert parse_relationships(etree.fromstring(RELS_TEMPLATE.format(rels))) == {"rId1": "b.png"}

    @pytest.mark.parametrize("rel, missing", [
        ('<Relationship Target="a.png"/>', "Id"),
        ('<Relationship Id="rId1"/>', "Target"),
    ])
    def test_missing_attribute(self, rel, missing):
        with pytest.raises(MissingAttributeError) as exc_info:
            parse_relationships(etree.fromstring(RELS_TEMPLATE.format(rel)))
        assert exc_info.value.attribute == missing


def footnote(footnote_id: str, text: str) -> str:
    return (
        f'<w:footnote w:id="{footnote_id}"><w:p><w:pPr><w:pStyle w:val="FootnoteText"/></w:pPr>'
        '<w:r><w:rPr><w:rStyle w:val="FootnoteReference"/></w:rPr><w:footnoteRef/></w:r>'
        f'<w:r><w:t xml:space="preserve"> {text}</w:t></w:r></w:p></w:footnote>'
    )


SEPARATORS = (
    '<w:footnote w:type="separator" w:id="-1"><w:p><w:r><w:separator/></w:r></w:p></w:footnote>'
    '<w:footnote w:type="continuationSeparator" w:id="0"><w:p><w:r><w:continuationSeparator/></w:r></w:p></w:footnote>'
)


class TestExtractFootnotes:

    @pytest.fixture
    def converter(self, image_extractor):
        return DocxToMarkdownConverter({}, image_extractor)

    def test_converts_and_strips(self, converter):
        root = etree.fromstring(footnotes_xml(SEPARATORS + footnote("1", "Note A") + footnote("2", "*Note* B")))
        assert extract_footnotes(root, converter) == {"1": "Note A", "2": "*Note* B"}

    def test_reserved_ids_never_included(self, converter):
        root = etree.fromstring(footnotes_xml(SEPARATORS + SEPARATORS + footnote("-1", "x") + footnote("0", "y")))
        table = extract_footnotes(root, converter)
        assert table == {}

    def test_absent_part(self, converter):
        assert extract_footnotes(None, converter) == {}

    def test_formatting_inside_footnote(self, converter):
        body = ('<w:footnote w:id="7"><w:p><w:r><w:rPr><w:i/></w:rPr><w:t>Ibid.</w:t></w:r></w:p>'
                '<w:p><w:r><w:t>p. 4</w:t></w:r></w:p></w:footnote>')
        root = etree.fromstring(footnotes_xml(body))
        assert extract_footnotes(root, converter) == {"7": "*Ibid.*\n\np. 4"}

    def test_footnote_without_id(self, converter):
        root = etree.fromstring(footnotes_xml('<w:footnote><w:p/></w:footnote>'))
        with pytest.raises(MissingAttributeError):
            extract_footnotes(root, converter)
