"""Processing strategies and the processor that applies them to files."""

import asyncio
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from filesweep.errors import AppError, ProcessingError
from filesweep.fileops import (
    extract_file_name,
    hash_file_content,
    read_file_content,
    remove_original_file,
    scan_input_directory,
    wait_for_file_availability,
    write_processed_data,
)
from filesweep.logsetup import log_error, log_error_simple, log_info, log_info_simple


def _line_count(text):
    """Count lines split on LF, ignoring a trailing empty line."""
    if not text:
        return 0
    newlines = text.count("\n")
    return newlines if text.endswith("\n") else newlines + 1


class ProcessingStrategy(ABC):
    """How the content of one file is turned into processed text."""

    @abstractmethod
    def process_content(self, file_name, content):
        """Return the processed text for ``content``; raise AppError on failure."""


@dataclass
class ProcessingMetadata:
    """Figures gathered while processing one file."""

    original_size: int
    processed_size: int
    processing_time_ms: int
    strategy_info: str | None = None


class HashProcessingStrategy(ProcessingStrategy):
    """Report the size and SHA-256 digest of the content."""

    def process_content(self, file_name, content):
        return (
            f"Processed content for {file_name}: Data size {len(content)}\n"
            f"SHA256: {hash_file_content(content)}"
        )


class TextAnalysisStrategy(ProcessingStrategy):
    """Count words, characters and lines of the content read as UTF-8 text."""

    def process_content(self, file_name, content):
        text = content.decode("utf-8", errors="replace")
        return (
            f"Text analysis for {file_name}: Data size {len(content)}\n"
            f"Words: {len(text.split())}\n"
            f"Characters: {len(text)}\n"
            f"Lines: {_line_count(text)}\n"
            f"Hash: {hash_file_content(content)}"
        )


@dataclass
class ProcessingResult:
    """Outcome of processing one file."""

    input_file: Path
    output_file: Path
    original_size: int
    processed_size: int
    processing_time_ms: int
    strategy_info: str | None = None


class FileProcessor:
    """Moves files from an input directory through a strategy into an output directory."""

    def __init__(self, config, strategy=None):
        self.config = config
        self.strategy = strategy if strategy is not None else TextAnalysisStrategy()
        self._tasks = set()

    async def process_file(self, file_path, output_dir):
        """Process one file, write its result and delete the original."""
        file_path = Path(file_path)
        log_info("Processing file", f"{file_path}")

        await wait_for_file_availability(file_path, self.config)
        content = await read_file_content(file_path)
        file_name = extract_file_name(file_path)

        start = time.perf_counter()
        processed = await self._process_in_background(file_name, content)
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        output_path = await write_processed_data(
            file_name, processed, output_dir, self.config.output_extension
        )
        await remove_original_file(file_path)
        log_info("Successfully processed file", f"{file_path}")

        metadata = ProcessingMetadata(
            original_size=len(content),
            processed_size=len(processed.encode("utf-8")),
            processing_time_ms=elapsed_ms,
        )
        return ProcessingResult(
            input_file=file_path,
            output_file=output_path,
            original_size=metadata.original_size,
            processed_size=metadata.processed_size,
            processing_time_ms=metadata.processing_time_ms,
            strategy_info=metadata.strategy_info,
        )

    async def process_initial_files(self, input_dir, output_dir):
        """Start processing every file already in ``input_dir``.

        Returns the started tasks; each yields a ProcessingResult, or None
        if that file failed (the failure is logged).
        """
        log_info_simple("Processing existing files in input directory...")
        files = await scan_input_directory(input_dir)
        if not files:
            log_info_simple("No existing files found in input directory.")
            return []
        log_info("Found existing files to process", f"{len(files)} files")
        return [self._spawn(path, Path(output_dir)) for path in files]

    def _spawn(self, file_path, output_dir):
        task = asyncio.create_task(self._process_existing(file_path, output_dir))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _process_existing(self, file_path, output_dir):
        log_info("Processing existing file", f"{file_path}")
        try:
            result = await self.process_file(file_path, output_dir)
        except AppError as exc:
            log_error("Failed to process existing file", f"{file_path}: {exc}")
            return None
        log_processing_result("Existing file processing", result)
        return result

    async def _process_in_background(self, file_name, content):
        def run():
            log_info("Starting CPU-bound processing", f"for '{file_name}' on a blocking thread")
            result = self.strategy.process_content(file_name, content)
            log_info("Finished CPU-bound processing", f"for '{file_name}'")
            return result

        try:
            return await asyncio.to_thread(run)
        except AppError:
            raise
        except Exception as exc:
            msg = f"Blocking task failed: {exc}"
            log_error_simple(msg)
            raise ProcessingError(msg) from exc


def log_processing_result(context, result):
    """Log a one-line summary of a ProcessingResult."""
    strategy_info = result.strategy_info if result.strategy_info is not None else "None"
    log_info(
        f"{context} completed successfully",
        f"Input: {result.input_file}, Output: {result.output_file}, "
        f"Original: {result.original_size} bytes, Processed: {result.processed_size} bytes, "
        f"Time: {result.processing_time_ms}ms, Strategy Info: {strategy_info}",
    )