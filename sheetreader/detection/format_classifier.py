"""
Format classification from content type.

The MIME type is sniffed from the file content first (OLE2 / ZIP magic),
then guessed from the name, then from a plain-text check. The classifier
only maps MIME types to parser tags.
"""

import mimetypes
import zipfile
from pathlib import Path

from config.logger import logger
from sheetreader.errors import SourceIOError

XLS_MIME = "application/vnd.ms-excel"
ODS_MIME = "application/vnd.oasis.opendocument.spreadsheet"
XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

MIME_TO_PARSER = {
    "text/plain": "csv",
    "text/csv": "csv",
    "text/x-log": "csv",
    "text/tab-separated-values": "csv",
    XLS_MIME: "xls",
    ODS_MIME: "ods",
    XLSX_MIME: "xlsx",
}

_OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
_ZIP_MAGIC = b"PK\x03\x04"
_SNIFF_BYTES = 8192

_TYPES = mimetypes.MimeTypes()
for _mime, _ext in (
    ("text/csv", ".csv"),
    ("text/x-log", ".log"),
    ("text/tab-separated-values", ".tsv"),
    ("text/plain", ".txt"),
    (XLS_MIME, ".xls"),
    (ODS_MIME, ".ods"),
    (XLSX_MIME, ".xlsx"),
):
    _TYPES.add_type(_mime, _ext)


def _looks_like_text(sample: bytes) -> bool:
    if b"\x00" in sample:
        return False
    try:
        sample.decode("utf-8")
        return True
    except UnicodeDecodeError as e:
        # a multi-byte sequence cut at the sample boundary is still text
        if e.start >= len(sample) - 3:
            return True
    printable = sum(1 for b in sample if b >= 0x20 or b in (0x09, 0x0A, 0x0D))
    return printable / len(sample) > 0.95


def _zip_mimetype(path):
    try:
        with zipfile.ZipFile(path) as zf:
            names = set(zf.namelist())
            if "mimetype" in names:
                declared = zf.read("mimetype").decode("ascii", errors="ignore").strip()
                if declared:
                    return declared
            if "xl/workbook.xml" in names:
                return XLSX_MIME
    except (zipfile.BadZipFile, OSError) as e:
        logger.debug(f"ZIP inspection failed for {path}: {e}")
    return None


class MimeTypeInspector:
    """Content-type lookup: magic bytes, then file name, then a text check."""

    def mimetype(self, path) -> str:
        path = Path(path)
        guessed, _ = _TYPES.guess_type(path.name, strict=False)

        try:
            with open(path, "rb") as f:
                head = f.read(_SNIFF_BYTES)
        except OSError as e:
            raise SourceIOError(f"Cannot open {path}: {e}") from e

        if head.startswith(_OLE2_MAGIC):
            if guessed and guessed != XLS_MIME and guessed.startswith("application/"):
                return guessed
            return XLS_MIME

        if head.startswith(_ZIP_MAGIC):
            declared = _zip_mimetype(path)
            if declared:
                return declared
            return guessed or "application/zip"

        if guessed:
            return guessed

        if not head:
            return "application/x-zerosize"

        if _looks_like_text(head):
            return "text/plain"

        return "application/octet-stream"


class FormatClassifier:

    def __init__(self, inspector=None):
        self.inspector = inspector or MimeTypeInspector()

    def classify(self, path, warnings=None):
        """
        Return the parser tag for ``path`` or None when the content type
        is not a known spreadsheet type. Never raises for unknown types;
        the warning is logged and appended to ``warnings`` when given.
        """
        mimetype = self.inspector.mimetype(path)
        parser = MIME_TO_PARSER.get(mimetype)

        if parser is None:
            message = f"Unknown MIME type {mimetype}: {path}"
            logger.warning(message)
            if warnings is not None:
                warnings.append(message)
        else:
            logger.info(f"Classified {path} as {parser} (MIME type {mimetype})")

        return parser
