"""
Contains the logic for reading the parts of a .docx package.
"""
import logging
import zipfile
from pathlib import Path

from lxml import etree

from ..utils.errors import MissingPartError


log = logging.getLogger("docxmark")


class DocxPackage:
    """
    Represents an opened .docx package.

    The archive stays open for the lifetime of the object and is closed
    by `close()` or by leaving the `with` block, whether the conversion
    succeeded or not.
    """

    def __init__(self, filepath: Path):
        """Opens the zip archive at `filepath`."""
        self.filepath = Path(filepath)
        self._zipfile = zipfile.ZipFile(self.filepath, 'r')


    def __enter__(self):
        return self


    def __exit__(self, exc_type, exc, tb):
        self.close()


    def close(self):
        self._zipfile.close()


    def read_part(self, part_name: str) -> bytes | None:
        """Returns the raw bytes of a package entry, or None if it does not exist."""
        try:
            info = self._zipfile.getinfo(part_name)
        except KeyError:
            return None
        with self._zipfile.open(info) as f:
            return f.read()


    def parse_part(self, part_name: str, required: bool = True) -> etree._Element | None:
        """
        Parses a package entry into an lxml tree and returns its root element.

        An absent or empty entry raises MissingPartError when `required`,
        otherwise None is returned.
        """
        data = self.read_part(part_name)
        if not data:
            if required:
                raise MissingPartError(part_name)
            log.info(f"Optional part '{part_name}' not present in '{self.filepath.name}'.")
            return None
        return etree.fromstring(data)
