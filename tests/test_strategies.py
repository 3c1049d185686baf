import pytest

from filesweep.errors import ProcessingError
from filesweep.fileops import hash_file_content
from filesweep.strategies import (
    CsvValidationStrategy,
    EncryptionStrategy,
    ImageMetadataStrategy,
    demonstrate_custom_strategies,
)


@pytest.mark.parametrize(
    "name, kind",
    [
        ("photo.jpg", "JPEG"),
        ("photo.jpeg", "JPEG"),
        ("icon.png", "PNG"),
        ("anim.gif", "GIF"),
        ("vector.svg", "Unknown"),
        ("PHOTO.JPG", "Unknown"),
    ],
)
def test_image_type_detection(name, kind):
    out = ImageMetadataStrategy().process_content(name, b"data")
    assert f"\nType: {kind}\n" in out


def test_image_report_layout():
    content = b"\x89PNG fake"
    out = ImageMetadataStrategy().process_content("icon.png", content)
    assert out.split("\n") == [
        f"Image analysis for icon.png: Data size {len(content)}",
        "Type: PNG",
        "Dimensions: 1920x1080",
        f"Hash: {hash_file_content(content)}",
    ]


def test_csv_valid():
    header = "name,age,city"
    rows = ["ann,30,paris", "bob,41,rome"]
    content = ("\n".join([header, *rows]) + "\n").encode()
    out = CsvValidationStrategy().process_content("people.csv", content).split("\n")
    assert out[0] == f"CSV validation for people.csv: Data size {len(content)}"
    assert out[1] == "Status: VALID"
    assert out[2] == f"Columns: {len(header.split(','))}"
    assert out[3] == f"Rows: {len(rows)}"
    assert out[4] == "Errors: None"
    assert out[5] == f"Hash: {hash_file_content(content)}"


def test_csv_crlf_lines():
    content = b"a,b\r\n1,2\r\n"
    out = CsvValidationStrategy().process_content("x.csv", content)
    assert "Status: VALID" in out
    assert "Rows: 1" in out


def test_csv_invalid_rows_reported():
    content = b"a,b,c\n1,2,3\n4,5\n"
    out = CsvValidationStrategy().process_content("bad.csv", content)
    assert "Status: INVALID" in out
    assert "Errors: Row 3 has 2 columns, expected 3" in out


def test_csv_multiple_errors_joined():
    content = b"a,b\n1\n2,3,4\n"
    out = CsvValidationStrategy().process_content("bad.csv", content)
    errors_line = next(line for line in out.split("\n") if line.startswith("Errors: "))
    assert errors_line.count("; ") == 1


def test_csv_empty_raises():
    with pytest.raises(ProcessingError, match="CSV file is empty"):
        CsvValidationStrategy().process_content("empty.csv", b"")


def _field(out, name):
    prefix = f"{name}: "
    return next(line[len(prefix):] for line in out.split("\n") if line.startswith(prefix))


def test_encryption_round_trip():
    key = "secret"
    content = b"attack at dawn, bring snacks"
    out = EncryptionStrategy(key).process_content("plan.txt", content)
    encrypted = bytes.fromhex(_field(out, "Encrypted data"))
    key_bytes = key.encode()
    decrypted = bytes(b ^ key_bytes[i % len(key_bytes)] for i, b in enumerate(encrypted))
    assert decrypted == content
    assert _field(out, "Key length") == str(len(key_bytes))
    assert _field(out, "Encryption") == "XOR"
    assert _field(out, "Hash") == hash_file_content(content)


def test_encryption_changes_data_and_keeps_length():
    content = b"hello"
    out = EncryptionStrategy("secret").process_content("h.txt", content)
    encrypted = bytes.fromhex(_field(out, "Encrypted data"))
    assert len(encrypted) == len(content)
    assert encrypted != content


def test_encryption_empty_content():
    out = EncryptionStrategy("secret").process_content("e.txt", b"")
    assert "Encrypted data: \n" in out


def test_encryption_empty_key_raises():
    with pytest.raises(ProcessingError):
        EncryptionStrategy("").process_content("e.txt", b"abc")


def test_demonstrate_custom_strategies(capsys):
    processors = demonstrate_custom_strategies()
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Created processors with custom strategies:",
        "- Image metadata processor",
        "- CSV validation processor",
        "- Encryption processor",
    ]
    assert [type(p.strategy) for p in processors] == [
        ImageMetadataStrategy,
        CsvValidationStrategy,
        EncryptionStrategy,
    ]
    assert processors[2].strategy.key == "my-secret-key"