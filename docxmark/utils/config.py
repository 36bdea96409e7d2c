"""
Defines configuration and settings for the conversion process.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class OutputFormat(Enum):
    """Format of the files written for each chapter."""
    MARKUP = "markup"   # raw kramdown, .page files
    HTML = "html"
    LATEX = "latex"


@dataclass
class ConversionConfig:
    """
    A container for all settings related to a conversion task.
    This object is created by the CLI and passed to the ConversionPipeline.
    """
    output_dir: Path = Path(".")
    output_format: OutputFormat = OutputFormat.MARKUP
    split_chapters: bool = True
    language: str = "en"
    # folder the images are written to, relative to output_dir
    image_subdir_filesystem: str = "images"
    # folder prefix used in the ![](...) references
    image_subdir_markup: str = "images"
    image_max_size: int = 800
    image_quality: int = 80
    # passed to the renderer so it does not hard-wrap paragraphs
    line_width: int = 100000
    num_threads: int = 0
