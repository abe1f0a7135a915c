"""Reading text sources (paths or open streams) into lines."""

from pathlib import Path

from config.settings import TEXT_ENCODINGS
from sheetreader.errors import SourceIOError


def is_stream(source) -> bool:
    return hasattr(source, "read") and not isinstance(source, (str, bytes, Path))


def decode_bytes(raw: bytes, encodings=TEXT_ENCODINGS) -> str:
    """Decode using the first encoding that fits (latin-1 always does)."""

    for encoding in encodings:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            continue
    return raw.decode("utf-8", errors="replace")


def read_text(source, encodings=TEXT_ENCODINGS) -> str:
    if is_stream(source):
        try:
            data = source.read()
        except (OSError, ValueError) as e:
            raise SourceIOError(f"Cannot read stream {source!r}: {e}") from e
        if isinstance(data, bytes):
            return decode_bytes(data, encodings)
        return data

    try:
        raw = Path(source).read_bytes()
    except OSError as e:
        raise SourceIOError(f"Cannot open {source}: {e}") from e
    return decode_bytes(raw, encodings)


def read_lines(source, encodings=TEXT_ENCODINGS) -> list:
    """
    Return every line of the source with its line ending removed.
    """
    return read_text(source, encodings).splitlines()
