"""Error types raised by the file processing service."""

from filesweep.logsetup import log_error


class AppError(Exception):
    """Base class for every error the service reports."""

    prefix = "Application error"

    def __init__(self, detail):
        super().__init__(detail)
        self.detail = detail

    def __str__(self):
        return f"{self.prefix}: {self.detail}"

    def log_with_context(self, context):
        """Log this error at error level, preceded by ``context``."""
        log_error(context, self)


class IoError(AppError):
    """A filesystem operation failed; ``detail`` holds the underlying OSError."""

    prefix = "IO error"


class WatchError(AppError):
    """Watching a directory for changes failed."""

    prefix = "File watch error"


class ProcessingError(AppError):
    """Processing a file or the configuration failed."""

    prefix = "Processing error"


def processing_error(msg):
    """Log ``msg`` and return a ProcessingError carrying it."""
    log_error("Processing error", msg)
    return ProcessingError(msg)