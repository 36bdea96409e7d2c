"""
Extracts embedded images from the package as size-capped JPEG files.
"""
import logging
import posixpath
from io import BytesIO
from pathlib import Path
from typing import Callable

from PIL import Image, UnidentifiedImageError

from ..utils.errors import MissingPartError


log = logging.getLogger("docxmark")

SUPPORTED_FORMATS = ("JPEG", "PNG")


class ImageExtractor:
    """
    Writes package images to the output folder and returns their markup reference.

    Every image is re-encoded as JPEG, scaled down (never up) so that neither
    side exceeds `max_size`, keeping the aspect ratio.
    """

    def __init__(self, read_part: Callable[[str], bytes | None], output_dir: Path,
                 subdir_filesystem: str = "images", subdir_markup: str = "images",
                 max_size: int = 800, quality: int = 80):
        self.read_part = read_part
        self.target_dir = Path(output_dir) / subdir_filesystem
        self.subdir_markup = subdir_markup
        self.max_size = max_size
        self.quality = quality
        self.extracted: list[Path] = []


    def extract(self, zip_path: str) -> str:
        """
        Extracts the package entry `zip_path` and returns the reference to embed
        in the markup, e.g. `images/image1.jpg`.
        """
        data = self.read_part(zip_path)
        if data is None:
            raise MissingPartError(zip_path)

        filename = self.output_name(zip_path)
        self.extract_and_resize(data, self.target_dir / filename)

        if not self.subdir_markup:
            return filename
        return posixpath.join(self.subdir_markup, filename)


    @staticmethod
    def output_name(zip_path: str) -> str:
        """`word/media/image1.png` -> `image1.jpg`"""
        stem = posixpath.splitext(posixpath.basename(zip_path))[0]
        return f"{stem}.jpg"


    def extract_and_resize(self, data: bytes, target: Path) -> bool:
        """
        Re-encodes JPEG or PNG `data` into `target`. Other formats are skipped
        with a warning; returns whether a file was written.
        """
        try:
            with Image.open(BytesIO(data)) as img:
                if img.format not in SUPPORTED_FORMATS:
                    log.warning(f"Unsupported image format '{img.format}' for '{target.name}'. Skipping.")
                    return False

                if img.width > self.max_size or img.height > self.max_size:
                    img.thumbnail((self.max_size, self.max_size), Image.Resampling.LANCZOS)

                if img.mode != "RGB":
                    img = img.convert("RGB")

                target.parent.mkdir(parents=True, exist_ok=True)
                img.save(target, format="JPEG", quality=self.quality)
        except UnidentifiedImageError:
            log.warning(f"Could not identify image data for '{target.name}'. Skipping.")
            return False

        self.extracted.append(target)
        log.debug(f"Extracted image '{target.name}' ({img.width}x{img.height}).")
        return True
