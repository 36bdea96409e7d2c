"""
Entry point for running the converter from a source checkout.
"""

from docxmark.main import main

if __name__ == "__main__":
    main()
