import pytest

from filesweep.config import ProcessingConfig
from filesweep.errors import IoError, ProcessingError
from filesweep.fileops import (
    ensure_output_directory,
    extract_file_name,
    format_file_size,
    get_file_size,
    hash_file_content,
    is_file_available,
    read_file_content,
    remove_original_file,
    scan_input_directory,
    setup_directories,
    validate_file_path,
    wait_for_file_availability,
    write_processed_data,
)


def fast_config(retries=2):
    return ProcessingConfig(max_retries=retries, initial_retry_delay_ms=1, max_retry_delay_sec=0)


def test_hash_of_empty_content():
    assert (
        hash_file_content(b"")
        == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
    )


def test_hash_of_abc():
    assert (
        hash_file_content(b"abc")
        == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    )


def test_hash_is_hex_of_fixed_length():
    digest = hash_file_content(b"some content here")
    assert len(digest) == 64
    assert set(digest) <= set("0123456789abcdef")


def test_format_file_size_bytes():
    assert format_file_size(0) == "0 B"
    assert format_file_size(1023) == "1023 B"


def test_format_file_size_units():
    assert format_file_size(1024) == "1.0 KB"
    assert format_file_size(1024 * 1024 - 1).endswith(" KB")
    assert format_file_size(1024 * 1024).endswith(" MB")
    assert format_file_size(1024**3).endswith(" GB")
    assert format_file_size(5 * 1024**4).endswith(" GB")


def test_extract_file_name():
    assert extract_file_name("some/dir/report.txt") == "report.txt"


@pytest.mark.parametrize("bad", ["/", "a/.."])
def test_extract_file_name_without_name(bad):
    with pytest.raises(ProcessingError, match="Could not get file name"):
        extract_file_name(bad)


def test_validate_file_path(tmp_path):
    target = tmp_path / "f.txt"
    with pytest.raises(ProcessingError, match="File does not exist"):
        validate_file_path(target)
    with pytest.raises(ProcessingError, match="Path is not a file"):
        validate_file_path(tmp_path)
    target.write_bytes(b"x")
    assert validate_file_path(target) is None


@pytest.mark.asyncio
async def test_is_file_available(tmp_path):
    target = tmp_path / "here.txt"
    assert await is_file_available(target, fast_config()) is False
    target.write_bytes(b"data")
    assert await is_file_available(target, fast_config()) is True


@pytest.mark.asyncio
async def test_wait_for_missing_file_fails(tmp_path):
    with pytest.raises(ProcessingError, match="not available after retries"):
        await wait_for_file_availability(tmp_path / "never.txt", fast_config(retries=3))


@pytest.mark.asyncio
async def test_wait_with_zero_retries_fails_at_once(tmp_path):
    target = tmp_path / "present.txt"
    target.write_bytes(b"x")
    with pytest.raises(ProcessingError):
        await wait_for_file_availability(target, fast_config(retries=0))


@pytest.mark.asyncio
async def test_wait_for_present_file(tmp_path):
    target = tmp_path / "present.txt"
    target.write_bytes(b"x")
    assert await wait_for_file_availability(target, fast_config()) is None


@pytest.mark.asyncio
async def test_read_file_content(tmp_path):
    target = tmp_path / "data.bin"
    target.write_bytes(b"\x00\x01payload")
    assert await read_file_content(target) == b"\x00\x01payload"
    with pytest.raises(IoError):
        await read_file_content(tmp_path / "missing.bin")


@pytest.mark.asyncio
async def test_write_processed_data(tmp_path):
    out = await write_processed_data("report.txt", "résumé\nline", tmp_path, ".processed.txt")
    assert out == tmp_path / "report.processed.txt"
    assert out.read_text(encoding="utf-8") == "résumé\nline"


@pytest.mark.asyncio
async def test_write_processed_data_missing_dir(tmp_path):
    with pytest.raises(IoError):
        await write_processed_data("a.txt", "x", tmp_path / "nope", ".out")


@pytest.mark.asyncio
async def test_remove_original_file(tmp_path):
    target = tmp_path / "gone.txt"
    target.write_bytes(b"x")
    await remove_original_file(target)
    assert not target.exists()
    with pytest.raises(IoError):
        await remove_original_file(target)


@pytest.mark.asyncio
async def test_scan_input_directory(tmp_path):
    (tmp_path / "a.txt").write_bytes(b"a")
    (tmp_path / "b.csv").write_bytes(b"b")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "c.txt").write_bytes(b"c")
    found = await scan_input_directory(tmp_path)
    assert set(found) == {tmp_path / "a.txt", tmp_path / "b.csv"}


@pytest.mark.asyncio
async def test_scan_missing_directory(tmp_path):
    with pytest.raises(IoError):
        await scan_input_directory(tmp_path / "absent")


@pytest.mark.asyncio
async def test_get_file_size(tmp_path):
    target = tmp_path / "sized.bin"
    target.write_bytes(b"x" * 321)
    assert await get_file_size(target) == 321
    with pytest.raises(IoError):
        await get_file_size(tmp_path / "missing")


@pytest.mark.asyncio
async def test_ensure_output_directory(tmp_path):
    target = tmp_path / "deep" / "out"
    await ensure_output_directory(target)
    assert target.is_dir()
    await ensure_output_directory(target)
    assert target.is_dir()


@pytest.mark.asyncio
async def test_setup_directories(tmp_path):
    input_dir = tmp_path / "in" / "nested"
    output_dir = tmp_path / "out"
    await setup_directories(input_dir, output_dir)
    assert input_dir.is_dir()
    assert output_dir.is_dir()