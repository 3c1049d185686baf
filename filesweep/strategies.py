"""Additional processing strategies for particular kinds of files."""

from filesweep.config import ProcessingConfig
from filesweep.errors import ProcessingError
from filesweep.fileops import hash_file_content
from filesweep.processor import FileProcessor, ProcessingStrategy

_IMAGE_TYPES = ((".jpg", "JPEG"), (".jpeg", "JPEG"), (".png", "PNG"), (".gif", "GIF"))


def _lines(text):
    """Split on LF, drop a trailing empty line and strip a CR before each LF."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class ImageMetadataStrategy(ProcessingStrategy):
    """Report the image type (by file extension), nominal dimensions and hash."""

    width = 1920
    height = 1080

    def process_content(self, file_name, content):
        image_type = next(
            (kind for suffix, kind in _IMAGE_TYPES if file_name.endswith(suffix)), "Unknown"
        )
        return (
            f"Image analysis for {file_name}: Data size {len(content)}\n"
            f"Type: {image_type}\n"
            f"Dimensions: {self.width}x{self.height}\n"
            f"Hash: {hash_file_content(content)}"
        )


class CsvValidationStrategy(ProcessingStrategy):
    """Check that every CSV row has as many columns as the header."""

    def process_content(self, file_name, content):
        lines = _lines(content.decode("utf-8", errors="replace"))
        if not lines:
            raise ProcessingError("CSV file is empty")

        header, *rows = lines
        columns = header.count(",") + 1
        errors = [
            f"Row {number} has {row.count(',') + 1} columns, expected {columns}"
            for number, row in enumerate(rows, start=2)
            if row.count(",") + 1 != columns
        ]
        status = "INVALID" if errors else "VALID"
        return (
            f"CSV validation for {file_name}: Data size {len(content)}\n"
            f"Status: {status}\n"
            f"Columns: {columns}\n"
            f"Rows: {len(rows)}\n"
            f"Errors: {'; '.join(errors) if errors else 'None'}\n"
            f"Hash: {hash_file_content(content)}"
        )


class EncryptionStrategy(ProcessingStrategy):
    """XOR the content with a repeating key and report it as hex."""

    def __init__(self, key):
        self.key = key

    def process_content(self, file_name, content):
        key_bytes = self.key.encode("utf-8")
        if content and not key_bytes:
            raise ProcessingError("Encryption key must not be empty")
        encrypted = bytes(
            byte ^ key_bytes[index % len(key_bytes)] for index, byte in enumerate(content)
        )
        return (
            f"Encrypted content for {file_name}: Data size {len(content)}\n"
            f"Encryption: XOR\n"
            f"Key length: {len(key_bytes)}\n"
            f"Encrypted data: {encrypted.hex()}\n"
            f"Hash: {hash_file_content(content)}"
        )


def demonstrate_custom_strategies():
    """Build one processor per custom strategy, announce them and return them."""
    config = ProcessingConfig()
    processors = (
        FileProcessor(config, ImageMetadataStrategy()),
        FileProcessor(config, CsvValidationStrategy()),
        FileProcessor(config, EncryptionStrategy("my-secret-key")),
    )
    print("Created processors with custom strategies:")
    print("- Image metadata processor")
    print("- CSV validation processor")
    print("- Encryption processor")
    return processors