"""
The main conversion pipeline (Facade).

This module orchestrates the entire conversion process, using the other
core modules to perform specific tasks.
"""
import logging
from pathlib import Path

from ..post_processing.post_processor import PostProcessor
from ..utils.config import ConversionConfig
from ..utils.structures import ParsedDocument, PartNames
from .docx_package import DocxPackage
from .docx_to_markdown_converter import DocxToMarkdownConverter
from .footnotes import extract_footnotes
from .image_extractor import ImageExtractor
from .relationships import parse_relationships
from .renderer import Renderer


log = logging.getLogger("docxmark")


class ConversionPipeline:
    """
    A facade that simplifies the conversion process.

    The CLI and the batch processor use this class to run a conversion.
    It coordinates the package reader, the converter, the post-processor
    and the renderer.
    """

    def __init__(self, config: ConversionConfig):
        """Initializes the pipeline with a specific configuration."""
        self.config = config


    def convert(self, source_path: Path) -> list[str]:
        """
        Executes the full .docx to markup conversion for a single file.
        Returns the names of the files written to the output folder.
        """
        output_dir = Path(self.config.output_dir)
        (output_dir / self.config.image_subdir_filesystem).mkdir(parents=True, exist_ok=True)

        # 1. Parse the package into body markup and footnote definitions
        parsed = self.parse(source_path)

        # 2. Repair quotes, split into chapters, append footnote definitions
        chapters = PostProcessor(parsed.content, parsed.footnote_definitions).run(
            split_chapters=self.config.split_chapters
        )

        # 3. Write the chapter files
        written = Renderer(self.config).render(chapters)
        log.info(f"Converted '{Path(source_path).name}' into {len(written)} file(s).")
        return written


    def parse(self, source_path: Path) -> ParsedDocument:
        """Reads the package and converts its body and footnotes to markup."""
        with DocxPackage(source_path) as package:
            document = package.parse_part(PartNames.DOCUMENT)
            relationships_root = package.parse_part(PartNames.DOCUMENT_RELS)
            footnotes_root = package.parse_part(PartNames.FOOTNOTES, required=False)

            image_extractor = ImageExtractor(
                package.read_part,
                self.config.output_dir,
                subdir_filesystem=self.config.image_subdir_filesystem,
                subdir_markup=self.config.image_subdir_markup,
                max_size=self.config.image_max_size,
                quality=self.config.image_quality,
            )
            converter = DocxToMarkdownConverter(
                relationships=parse_relationships(relationships_root),
                image_extractor=image_extractor,
            )

            footnote_definitions = extract_footnotes(footnotes_root, converter)
            content = converter.convert(document)

        if converter.dropped_kinds:
            log.info(f"Skipped unhandled elements: {', '.join(converter.dropped_kinds)}")

        return ParsedDocument(content, footnote_definitions, tuple(converter.dropped_kinds))
