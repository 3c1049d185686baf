"""Filesystem helpers used while processing files."""

import asyncio
import hashlib
from pathlib import Path

from filesweep.errors import IoError, ProcessingError
from filesweep.logsetup import log_debug, log_error, log_error_simple, log_info

KB = 1024
MB = KB * 1024
GB = MB * 1024


def hash_file_content(content):
    """Return the hex SHA-256 digest of ``content``."""
    return hashlib.sha256(content).hexdigest()


def _try_open(path):
    with open(path, "rb"):
        pass


async def is_file_available(file_path, config):
    """Return True if the file can be opened, i.e. is not locked or missing."""
    try:
        await asyncio.to_thread(_try_open, file_path)
    except OSError as exc:
        code = getattr(exc, "winerror", None) or exc.errno
        if code == config.file_locked_error_code:
            log_debug("File is temporarily locked", f"{file_path}")
        else:
            log_debug("File not available", f"{file_path}: {exc}")
        return False
    return True


async def wait_for_file_availability(file_path, config):
    """Wait, with exponential backoff, until the file can be opened.

    Raises ProcessingError once ``config.max_retries`` attempts have failed.
    """
    delay = config.initial_retry_delay_ms / 1000
    cap = float(config.max_retry_delay_sec)
    for attempt in range(1, config.max_retries + 1):
        if await is_file_available(file_path, config):
            return
        log_info(
            "File not available, retrying",
            f"{file_path} (attempt {attempt}/{config.max_retries})",
        )
        await asyncio.sleep(delay)
        delay = min(delay * 2, cap)

    log_error("File still not available after retries", f"{file_path}")
    raise ProcessingError(f"File {file_path} is not available after retries")


async def read_file_content(file_path):
    """Read the whole file and return its bytes."""
    try:
        data = await asyncio.to_thread(Path(file_path).read_bytes)
    except OSError as exc:
        log_error("Failed to read file", f"{file_path}: {exc}")
        raise IoError(exc) from exc
    log_info("Read bytes from file", f"{len(data)} bytes from {file_path}")
    return data


def extract_file_name(file_path):
    """Return the final component of ``file_path``."""
    name = Path(file_path).name
    if name in ("", ".."):
        msg = f"Could not get file name for {file_path}"
        log_error_simple(msg)
        raise ProcessingError(msg)
    return name


async def write_processed_data(file_name, processed_data, output_dir, output_extension):
    """Write ``processed_data`` to ``<stem><output_extension>`` in ``output_dir``.

    Returns the path of the written file.
    """
    stem = Path(file_name).stem
    if not stem:
        raise ProcessingError(f"Could not get file stem for {file_name!r}")
    output_path = Path(output_dir) / f"{stem}{output_extension}"
    log_info("Writing processed output to", f"{output_path}")
    try:
        await asyncio.to_thread(output_path.write_bytes, processed_data.encode("utf-8"))
    except OSError as exc:
        log_error("Failed to write to output file", f"{output_path}: {exc}")
        raise IoError(exc) from exc
    log_info("Wrote processed data to", f"{output_path}")
    return output_path


async def remove_original_file(file_path):
    """Delete the input file once it has been processed."""
    try:
        await asyncio.to_thread(Path(file_path).unlink)
    except OSError as exc:
        log_error("Failed to remove original file", f"{file_path}: {exc}")
        raise IoError(exc) from exc
    log_info("Original file removed", f"{file_path}")


def _list_files(directory):
    return sorted(path for path in Path(directory).iterdir() if path.is_file())


async def scan_input_directory(input_dir):
    """Return the regular files directly inside ``input_dir``."""
    try:
        return await asyncio.to_thread(_list_files, input_dir)
    except OSError as exc:
        log_error("Failed to read input directory for initial scan", exc)
        raise IoError(exc) from exc


async def ensure_output_directory(output_dir):
    """Create ``output_dir`` and its parents if it does not exist."""
    output_dir = Path(output_dir)
    if output_dir.exists():
        return
    log_info("Creating output directory", f"{output_dir}")
    try:
        await asyncio.to_thread(output_dir.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        log_error("Failed to create output directory", f"{output_dir}: {exc}")
        raise IoError(exc) from exc


def validate_file_path(file_path):
    """Raise ProcessingError unless ``file_path`` is an existing regular file."""
    path = Path(file_path)
    if not path.exists():
        raise ProcessingError(f"File does not exist: {file_path}")
    if not path.is_file():
        raise ProcessingError(f"Path is not a file: {file_path}")


async def get_file_size(file_path):
    """Return the size of the file in bytes."""
    try:
        info = await asyncio.to_thread(Path(file_path).stat)
    except OSError as exc:
        log_error("Failed to get file metadata", f"{file_path}: {exc}")
        raise IoError(exc) from exc
    return info.st_size


def format_file_size(size):
    """Format a byte count as B, KB, MB or GB with one decimal place."""
    if size < KB:
        return f"{size} B"
    if size < MB:
        return f"{size / KB:.1f} KB"
    if size < GB:
        return f"{size / MB:.1f} MB"
    return f"{size / GB:.1f} GB"


async def setup_directories(input_dir, output_dir):
    """Create the input and output directories if they are missing."""
    input_dir = Path(input_dir)
    try:
        await asyncio.to_thread(input_dir.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        log_error("Failed to create input directory", exc)
        raise IoError(exc) from exc
    await ensure_output_directory(output_dir)
    log_info("Input directory set to", f"{input_dir}")
    log_info("Output directory set to", f"{Path(output_dir)}")