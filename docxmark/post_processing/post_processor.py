"""
Post processing of the converted kramdown text.
"""
import logging
import re


log = logging.getLogger("docxmark")

FOOTNOTE_MARKER = re.compile(r"\[\^(.+?)\]")
QUOTE_PREFIX = "> "
CHAPTER_PREFIX = "# "


def split_lines(text: str) -> list[str]:
    """Splits on newlines, dropping trailing empty lines."""
    lines = text.split("\n")
    while lines and not lines[-1]:
        lines.pop()
    return lines


class PostProcessor():
    """
    Post processing of the flat markup produced by the converter.

    The markup carries no structure, so every pass works on lines and text
    patterns: merges consecutive quote paragraphs, splits the document into
    chapters at level-1 headings and appends footnote definitions to the
    chapters that reference them.
    """
    def __init__(self, content: str, footnote_definitions: dict[str, str]):
        self.content = content
        self.footnote_definitions = footnote_definitions
        self.chapters: list[str] = [content]


    def run(self, split_chapters: bool = True) -> list[str]:
        """Runs all passes in order and returns the chapters."""
        self.join_blockquotes()
        if split_chapters:
            self.split_into_chapters()
        self.add_footnote_definitions()
        return self.chapters


    def join_blockquotes(self) -> str:
        """
        Marks a line that sits between two quote lines with an extra `>`,
        so kramdown keeps the quote paragraphs together.
        """
        lines = split_lines(self.content)
        last = len(lines) - 1
        processed_lines = []
        for i, line in enumerate(lines):
            if (0 < i < last
                    and lines[i - 1].startswith(QUOTE_PREFIX)
                    and lines[i + 1].startswith(QUOTE_PREFIX)):
                processed_lines.append(">" + line)
            else:
                processed_lines.append(line)

        self.content = "\n".join(processed_lines)
        self.chapters = [self.content]
        return self.content


    def split_into_chapters(self) -> list[str]:
        """Starts a new chapter at every level-1 heading (Heading1 style)."""
        chapters = [""]
        for line in split_lines(self.content):
            if line.startswith(CHAPTER_PREFIX):
                chapters.append("")
            chapters[-1] += line + "\n"

        log.debug(f"Split content into {len(chapters)} chapters.")
        self.chapters = chapters
        return self.chapters


    def add_footnote_definitions(self) -> list[str]:
        """Appends a definition for every distinct footnote referenced in a chapter."""
        for n, chapter in enumerate(self.chapters):
            # dict keeps the order of first appearance
            footnote_ids = dict.fromkeys(FOOTNOTE_MARKER.findall(chapter))
            definitions = []
            for footnote_id in footnote_ids:
                if footnote_id not in self.footnote_definitions:
                    log.warning(f"Footnote [^{footnote_id}] has no definition.")
                definition = self.footnote_definitions.get(footnote_id, "")
                definitions.append(f"[^{footnote_id}]: {definition}\n\n")
            self.chapters[n] = chapter + "\n\n" + "".join(definitions)
        return self.chapters
