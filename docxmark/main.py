"""
The main entry point for the docx to kramdown converter.
"""
import logging
import sys


def main():
    """Runs the CLI and exits with its status code."""
    log = logging.getLogger("docxmark")
    try:
        from .cli import run_cli
        sys.exit(run_cli())
    except Exception:
        log.exception("A critical error occurred while running the CLI.")
        sys.exit(1)


if __name__ == '__main__':
    main()
