"""
Handles the parallel processing of a batch of files.
Each file is converted by its own ConversionPipeline in a worker process.
"""
import logging
import os
import concurrent.futures
import dataclasses
from pathlib import Path
from typing import Callable

from .pipeline import ConversionPipeline
from ..utils.config import ConversionConfig
from ..utils.logger import setup_worker_logger

# The main logger is configured by the entry point (CLI)
# We just get it here to write high-level status updates from the main process
log = logging.getLogger("docxmark")

BatchResult = tuple[Path, str, Exception | None]


def _convert_single_file(path: Path, config: ConversionConfig) -> BatchResult:
    """
    A standalone function to be the target for the executor.
    It runs the full conversion pipeline on a single file and
    captures all its log output.

    Returns:
        tuple[Path, str, Exception | None]:
            - The path of the processed file.
            - The captured log output as a string.
            - An exception object if one occurred, else None.
    """
    log_stream, log_handler = setup_worker_logger()
    worker_log = logging.getLogger("docxmark")

    try:
        worker_log.info(f"Converting: {path.name}")
        ConversionPipeline(config).convert(path)
        worker_log.info(f"Successfully finished conversion for: {path.name}")
        return path, log_stream.getvalue(), None

    except Exception as e:
        # Full traceback goes to the worker's buffer, written to the log file later
        worker_log.error(f"Failed conversion for: {path.name}", exc_info=True)

        # Custom exceptions may not survive pickling back to the main process
        safe_exc = RuntimeError(f"{type(e).__name__}: {str(e)}")
        return path, log_stream.getvalue(), safe_exc

    finally:
        log_handler.close()
        log_stream.close()


class BatchProcessor:
    """Orchestrates the conversion of multiple files in parallel."""

    def __init__(self, config: ConversionConfig):
        self.config = config


    def output_dirs(self, files: list[Path]) -> list[Path]:
        """
        A single file is written straight to output_dir; a batch gets one
        subfolder per file, named after the file. Repeated names get a
        numeric suffix (`book`, `book_2`, ...).
        """
        output_dir = Path(self.config.output_dir)
        if len(files) == 1:
            return [output_dir]

        used: set[str] = set()
        dirs = []
        for path in files:
            name = path.stem
            counter = 2
            while name in used:
                name = f"{path.stem}_{counter}"
                counter += 1
            used.add(name)
            dirs.append(output_dir / name)
        return dirs


    def configs_for(self, files: list[Path]) -> list[ConversionConfig]:
        """One config per file, differing only in the output folder."""
        if len(files) == 1:
            return [self.config]
        return [
            dataclasses.replace(self.config, output_dir=output_dir)
            for output_dir in self.output_dirs(files)
        ]


    def run(self, files: list[Path], progress_callback: Callable | None = None) -> list[BatchResult]:
        """
        Processes a list of files in parallel using a ProcessPoolExecutor.

        Args:
            files: A list of Path objects to convert.
            progress_callback: A function to be called as each file completes.
                               It receives (path, exception or None).

        Returns:
            The (path, log, exception) results in the order of `files`.
        """
        th = self.config.num_threads
        max_workers = th if th > 0 else (os.cpu_count() or 1)
        max_workers = min(max_workers, max(len(files), 1))
        log.info(f"Starting batch processing with up to {max_workers} workers.")

        ordered_results: list[BatchResult | None] = [None] * len(files)

        with concurrent.futures.ProcessPoolExecutor(max_workers) as executor:
            # keyed by position, so a file listed twice keeps both result slots
            future_to_index = {
                executor.submit(_convert_single_file, path, config): i
                for i, (path, config) in enumerate(zip(files, self.configs_for(files)))
            }

            for future in concurrent.futures.as_completed(future_to_index):
                idx = future_to_index[future]
                path = files[idx]

                try:
                    p, log_string, exc = future.result()
                except Exception as e:
                    # The worker itself failed (e.g. the process died)
                    log.error(f"Critical worker failure for {path.name}: {e}", exc_info=True)
                    p, log_string, exc = path, f"CRITICAL FAILURE: {e}\n", e

                ordered_results[idx] = (p, log_string, exc)
                if progress_callback:
                    progress_callback(path, exc)

        self._write_worker_logs(ordered_results)
        return [r for r in ordered_results if r is not None]


    def _write_worker_logs(self, ordered_results: list[BatchResult | None]):
        """Appends each worker's buffered log to the main log file, in input order."""
        file_handler = next(
            (h for h in log.handlers if isinstance(h, logging.FileHandler)), None
        )
        if file_handler is None:
            return

        for result in ordered_results:
            if result is None:
                log.error("Missing result in ordered list.")
                continue
            path, log_string, _ = result
            if not log_string:
                continue
            file_handler.stream.write(f"\n--- Log for {path.name} ---\n")
            file_handler.stream.write(log_string)
            file_handler.stream.write(f"--- End log for {path.name} ---\n")
        file_handler.flush()
        log.info("Ordered log writing complete.")
