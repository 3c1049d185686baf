"""The file processing service: process existing files, then watch for new ones."""

import argparse
import asyncio
import sys

from filesweep.config import DEFAULT_CONFIG_PATH, AppConfig
from filesweep.errors import AppError
from filesweep.fileops import setup_directories
from filesweep.logsetup import init_logging, log_error, log_info, log_info_simple
from filesweep.processor import FileProcessor, log_processing_result
from filesweep.watcher import watch_files


async def _watch(input_dir, queue, watcher_config):
    log_info_simple("Starting file watcher...")
    try:
        await watch_files(input_dir, queue, watcher_config)
    except AppError as exc:
        log_error("File watcher experienced an error", exc)


async def _process_new(processor, file_path, output_dir):
    try:
        result = await processor.process_file(file_path, output_dir)
    except AppError as exc:
        log_error("Failed to process new file", f"{file_path}: {exc}")
        return None
    log_processing_result("File processing", result)
    return result


async def run(config):
    """Run the service with ``config`` until cancelled."""
    log_info_simple("Starting Concurrent File Processor service...")
    input_dir = config.input_dir()
    output_dir = config.output_dir()
    await setup_directories(input_dir, output_dir)

    queue = asyncio.Queue(maxsize=config.watcher.channel_buffer_size)
    processor = FileProcessor(config.processing)
    await processor.process_initial_files(input_dir, output_dir)

    watcher_task = asyncio.create_task(_watch(input_dir, queue, config.watcher))
    tasks = set()
    log_info_simple("Starting main file processing loop...")
    try:
        while True:
            file_path = await queue.get()
            log_info("Received new file for processing", f"{file_path}")
            task = asyncio.create_task(_process_new(processor, file_path, output_dir))
            tasks.add(task)
            task.add_done_callback(tasks.discard)
    finally:
        watcher_task.cancel()
        await asyncio.gather(watcher_task, return_exceptions=True)
        log_info_simple("Concurrent File Processor service stopped gracefully.")


def main(argv=None):
    """Command-line entry point; returns the process exit status."""
    parser = argparse.ArgumentParser(
        prog="filesweep",
        description="Process files placed in an input directory and write results to an output directory.",
    )
    parser.add_argument(
        "--config",
        default=str(DEFAULT_CONFIG_PATH),
        help="path of the TOML configuration file (created with defaults if missing)",
    )
    args = parser.parse_args(argv)

    try:
        config = AppConfig.load_or_default(args.config)
        init_logging(config.logging)
    except (AppError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        asyncio.run(run(config))
    except KeyboardInterrupt:
        return 0
    except AppError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())