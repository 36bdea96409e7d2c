"""
Writes the chapters to disk as kramdown, HTML or LaTeX files.
"""
import logging
import re
from pathlib import Path

import markdown
import pypandoc

from ..utils.config import ConversionConfig, OutputFormat
from ..utils.structures import FNames as FN


log = logging.getLogger("docxmark")

MARKDOWN_EXTENSIONS = ["extra"]   # footnotes, tables, attribute lists

# kramdown block attribute written before a Title heading
TITLE_MARKER = "{: .class = 'title' }"
# the same class in the syntax each renderer understands on a heading line
HTML_TITLE_ATTRIBUTE = " {: .title }"      # Python-Markdown attr_list
PANDOC_TITLE_ATTRIBUTE = " {.title}"       # pandoc header_attributes
FOOTNOTE_DEFINITION = re.compile(r"^\[\^.+?\]:")


def attach_title_markers(text: str, attribute: str) -> tuple[str, bool]:
    """
    Moves every standalone title marker onto the heading line that follows it.

    A marker that is not followed by a heading is removed. Returns the text and
    whether a removed marker closed the chapter (only blank lines or footnote
    definitions after it), i.e. belongs to the heading that opens the next one.
    """
    lines = text.split("\n")
    output = []
    carried = False
    for i, line in enumerate(lines):
        if line.strip() != TITLE_MARKER:
            output.append(line)
            continue

        following = lines[i + 1] if i + 1 < len(lines) else ""
        if following.startswith("#"):
            lines[i + 1] = following + attribute
            continue

        carried = all(
            not rest.strip() or FOOTNOTE_DEFINITION.match(rest) for rest in lines[i + 1:]
        )
        log.debug("Removed title marker without a following heading.")
    return "\n".join(output), carried


class Renderer:
    """
    Renders a chapter list into files in `config.output_dir`.

    The markup of every chapter is always written as a `.page` file; HTML and
    LaTeX output is rendered from those files into a sibling file with the
    matching extension.
    """

    def __init__(self, config: ConversionConfig):
        self.config = config
        self.output_dir = Path(config.output_dir)


    def render(self, chapters: list[str]) -> list[str]:
        """Writes the output files and returns their names, in chapter order."""
        markup_files = self.render_markup(chapters)

        output_format = self.config.output_format
        if output_format == OutputFormat.HTML:
            return self._render_each(markup_files, FN.HTML_EXT, self.to_html, HTML_TITLE_ATTRIBUTE)
        if output_format == OutputFormat.LATEX:
            return self._render_each(markup_files, FN.LATEX_EXT, self.to_latex, PANDOC_TITLE_ATTRIBUTE)
        return markup_files


    def render_markup(self, chapters: list[str]) -> list[str]:
        """Writes one `.page` file per chapter, or only chapter 0 when not splitting."""
        lang = self.config.language
        if self.config.split_chapters:
            names = [FN.CHAPTER.format(index=n, lang=lang) for n in range(len(chapters))]
        else:
            names = [FN.SINGLE.format(lang=lang)]
            chapters = chapters[:1]

        for name, text in zip(names, chapters):
            (self.output_dir / name).write_text(text, encoding="utf-8")
            log.debug(f"Wrote '{name}'.")
        return names


    def to_html(self, text: str) -> str:
        return markdown.markdown(text, extensions=MARKDOWN_EXTENSIONS)


    def to_latex(self, text: str) -> str:
        return pypandoc.convert_text(
            text, "latex", format="markdown",
            extra_args=[f"--columns={self.config.line_width}"],
        )


    def _render_each(self, markup_files: list[str], ext: str, render_func,
                     title_attribute: str) -> list[str]:
        """
        Renders each markup file. The chapter split leaves a Title marker at the
        end of one chapter and its heading at the start of the next, so such a
        marker is handed on to the following chapter.
        """
        rendered_files = []
        carried = False
        for markup_name in markup_files:
            name = str(Path(markup_name).with_suffix(f".{ext}"))
            text = (self.output_dir / markup_name).read_text(encoding="utf-8")
            if carried:
                text = TITLE_MARKER + "\n" + text
            text, carried = attach_title_markers(text, title_attribute)
            (self.output_dir / name).write_text(render_func(text), encoding="utf-8")
            log.debug(f"Rendered '{markup_name}' to '{name}'.")
            rendered_files.append(name)
        return rendered_files
