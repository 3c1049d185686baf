# filesweep

filesweep is a small asyncio service that works on an input directory. Each file in that directory is read and passed through a processing strategy. The strategy's report is written to an output directory, and then the original file is deleted.

When the service starts, it first processes every file already in the input directory. After that it uses `watchdog` to watch the directory and processes each new file as it is created.

## Installation

```
pip install .
```

To install the test dependencies as well:

```
pip install ".[test]"
```

## Running the service

```
filesweep
filesweep --config path/to/config.toml
```

By default the configuration is read from `config.toml` in the current directory. If the file named by `--config` does not exist, filesweep writes the default settings to it and uses them. The service then:

1. Sets up logging.
2. Creates the input and output directories.
3. Starts processing the files already in the input directory.
4. Watches the input directory for new files and processes each one concurrently.

The service runs until it is interrupted, for example with Ctrl-C, and then exits with status 0. It exits with status 1 in these cases:

- the configuration cannot be read or is invalid;
- the log level is unknown;
- the directories cannot be created.

The same service can be started from Python with `asyncio.run(filesweep.app.run(config))`.

## Configuration

`config.toml` has four tables. Every table and every key must be present, and each value must have the right type. Integers must not be negative, except `file_locked_error_code`. The defaults are:

```toml
[processing]
max_retries = 10
initial_retry_delay_ms = 100
max_retry_delay_sec = 2
output_extension = ".processed.txt"
file_locked_error_code = 32

[directories]
input_dir = "./input_files"
output_dir = "./output_files"

[logging]
level = "info"
log_dir = "logs"
log_basename = "app_log"
duplicate_to_stdout = true

[watcher]
channel_buffer_size = 32
processing_delay_ms = 50
recursive = true
```

- **Retries.** If a file cannot be opened yet, filesweep tries again. The first wait is `initial_retry_delay_ms`. The wait doubles after each attempt, up to `max_retry_delay_sec`. After `max_retries` failed attempts the file is given up with a `ProcessingError`. An open error whose code equals `file_locked_error_code` is logged as a temporary lock.
- **Output file name.** The output file takes the input file's name without its last extension and adds `output_extension`. For example, `notes.txt` becomes `notes.processed.txt`.
- **Logging.** Logs are written to `<log_dir>/<log_basename>_<timestamp>.log`. The accepted levels are `trace`, `debug`, `info`, `warn`, `warning`, `error` and `off`. When `duplicate_to_stdout` is true, messages at info level and above are also printed to stdout.
- **Watcher.** `channel_buffer_size` bounds the queue of detected files. `processing_delay_ms` is a pause before a new file is handed on. `recursive` also watches subdirectories. The initial scan, however, only looks at files directly inside the input directory.

`filesweep.config.AppConfig` provides:

- `from_file(path)`
- `load_or_default(path)`
- `save_to_file(path)`
- `input_dir()`, `output_dir()` and `log_dir()`

## Processing strategies

A `filesweep.processor.FileProcessor` uses `TextAnalysisStrategy` unless you give it another strategy. A strategy is an object with a `process_content(file_name, content)` method. It takes the file name and the file's bytes and returns the report text. Subclass `ProcessingStrategy` to write your own.

```python
import asyncio
from pathlib import Path

from filesweep.config import ProcessingConfig
from filesweep.processor import FileProcessor
from filesweep.strategies import CsvValidationStrategy

processor = FileProcessor(ProcessingConfig(), CsvValidationStrategy())
result = asyncio.run(processor.process_file(Path("in/data.csv"), Path("out")))
print(result.output_file, result.original_size, result.processed_size, result.processing_time_ms)
```

`process_file` returns a `ProcessingResult`.

`process_initial_files(input_dir, output_dir)` starts one task for each file in the input directory and returns the list of tasks. Each task gives a `ProcessingResult`, or `None` if that file failed. Failures are logged.

The available strategies are:

- `filesweep.processor`:
  - `HashProcessingStrategy` reports the content size and its SHA-256 hash.
  - `TextAnalysisStrategy` reports the word, character and line counts and the hash. The content is decoded as UTF-8, and invalid bytes are replaced.
- `filesweep.strategies`:
  - `ImageMetadataStrategy` gives the image type, judged from the file's extension (`.jpg`/`.jpeg`, `.png` or `.gif`). It also reports fixed nominal dimensions of 1920x1080 and the hash. It does not decode the image.
  - `CsvValidationStrategy` checks that every row has as many comma-separated columns as the header. It reports the column count, the row count and any mismatched rows. It raises `ProcessingError` for an empty file.
  - `EncryptionStrategy(key)` XORs the content with the repeating key and shows the result as hex. This is a demonstration, not real encryption. An empty key raises `ProcessingError` when there is content.

`filesweep.strategies.demonstrate_custom_strategies()` builds one processor for each of the three strategies above. It prints a short list of them and returns the three processors.

## File helpers

`filesweep.fileops` contains the filesystem helpers the processor uses. Among them are:

- `hash_file_content` and `format_file_size`, for example `1536` becomes `"1.5 KB"`.
- `validate_file_path`, `get_file_size` and `scan_input_directory`.
- `setup_directories`.

Most of these helpers are coroutines.

## Errors

Every error derives from `filesweep.errors.AppError`:

- `IoError`: a filesystem operation failed.
- `WatchError`: the input directory could not be watched.
- `ProcessingError`: processing or configuration failed.

`AppError.log_with_context(context)` writes the error to the log.

## Limitations

- Processed files are not tracked anywhere. The only record of a file is its output report and the log.
- If a new file has the same name without extension as an earlier one, its report overwrites the earlier report.