"""
Handles command-line argument parsing and initiates the conversion.
This is the entry point for the console script.
"""
import argparse
import logging
from pathlib import Path

from .core.batch_processor import BatchProcessor
from .utils.config import ConversionConfig, OutputFormat
from .utils.logger import LOG_DIR, setup_main_logger


log = logging.getLogger("docxmark")


def collect_files(input_paths: list[Path]) -> list[Path]:
    """
    Expands folders into the .docx files they contain and skips missing paths.
    Returns resolved paths without duplicates, in first-seen order.
    """
    files_to_process = []
    for path in input_paths:
        if not path.exists():
            log.warning(f"Input path does not exist, skipping: {path}")
            continue
        if path.is_dir():
            # Word lock files (~$name.docx) are not packages
            files_to_process.extend(
                p for p in sorted(path.rglob("*.docx")) if not p.name.startswith("~$")
            )
        elif path.suffix.lower() == ".docx":
            files_to_process.append(path)
    # a file named twice, or also found through its folder, is converted once
    return list(dict.fromkeys(p.resolve() for p in files_to_process))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docxmark",
        description="Converts Word .docx files into kramdown, HTML or LaTeX.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input_paths", type=Path, nargs="+",
                        help="Input .docx files or/and folders separated by a space.")
    parser.add_argument("-o", "--output", type=Path, required=True,
                        help="Output folder. A batch gets one subfolder per input file.")
    parser.add_argument("-f", "--format", choices=[f.value for f in OutputFormat],
                        default=OutputFormat.MARKUP.value,
                        help="Output format of the chapter files.")
    parser.add_argument("--no-split", action="store_true",
                        help="Write the whole document as a single chapter.")
    parser.add_argument("-l", "--language", default="en",
                        help="Language code used in the output file names.")
    parser.add_argument("--image-dir", default="images",
                        help="Folder, relative to the output folder, to write images to.")
    parser.add_argument("--image-ref-dir", default="images",
                        help="Folder prefix used for image references in the markup.")
    parser.add_argument("--threads", type=int, default=0,
                        help="Number of parallel workers to use for a batch. 0 to use max.")
    parser.add_argument("--log-dir", type=Path, default=LOG_DIR,
                        help="Folder for the per-run log files.")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show info messages on the console.")
    return parser


def run_cli(argv: list[str] | None = None) -> int:
    """
    The main function for the command-line interface.
    Parses arguments and runs the conversion pipeline. Returns the exit code.
    """
    args = build_parser().parse_args(argv)

    console_level = logging.INFO if args.verbose else logging.ERROR
    setup_main_logger(console_level, log_dir=args.log_dir)

    files_to_process = collect_files(args.input_paths)
    if not files_to_process:
        log.warning("No .docx files found to process.")
        return 1

    config = ConversionConfig(
        output_dir=args.output,
        output_format=OutputFormat(args.format),
        split_chapters=not args.no_split,
        language=args.language,
        image_subdir_filesystem=args.image_dir,
        image_subdir_markup=args.image_ref_dir,
        num_threads=args.threads,
    )
    processor = BatchProcessor(config)

    num_files = len(files_to_process)
    log.info(f"Found {num_files} files. Starting conversion...")

    completed_count = 0
    def progress_callback(path: Path, exc: Exception | None):
        nonlocal completed_count
        completed_count += 1
        completed_str = str(completed_count).rjust(len(str(num_files)))
        prefix = f"[{completed_str}/{num_files}]"
        if exc:
            print(f"{prefix} Error: {path.name}", flush=True)
            print(f"  -> {exc}", flush=True)
            # traceback is already in the worker log
            log.error(f"Failed to convert {path.name}: {exc}", exc_info=False)
        else:
            print(f"{prefix} Done: {path.name}", flush=True)

    results = processor.run(files_to_process, progress_callback)
    failed = sum(1 for _, _, exc in results if exc is not None)

    print(f"\nBatch conversion finished. {num_files - failed} converted, {failed} failed.")
    return 1 if failed else 0
