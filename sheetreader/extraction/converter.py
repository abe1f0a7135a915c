"""
Fixed-width text → temporary CSV.

The temporary file is owned by a single load: ``converted()`` creates it
and removes it again when the block exits, whether or not parsing worked.
"""

import csv
import os
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path

from config.logger import logger
from config.settings import ARTIFACT_ENCODING, FIXED_WIDTH_GAP_THRESHOLD, TEMP_PREFIX
from sheetreader.errors import WriteError
from sheetreader.extraction.fixed_width import apply, build_rule


class CsvRowWriter:

    def __init__(self, path, encoding=ARTIFACT_ENCODING):
        self.path = Path(path)
        try:
            self._fh = open(self.path, "w", newline="", encoding=encoding)
        except OSError as e:
            raise WriteError(f"Cannot create {self.path}: {e}") from e
        self._writer = csv.writer(self._fh, delimiter=",")

    def add_row(self, fields):
        try:
            self._writer.writerow(list(fields))
        except (OSError, csv.Error) as e:
            raise WriteError(f"Cannot write row to {self.path}: {e}") from e

    def close(self):
        try:
            self._fh.close()
        except OSError as e:
            raise WriteError(f"Cannot close {self.path}: {e}") from e


class CsvSpreadsheetWriter:

    def create(self, path, format="csv", encoding=ARTIFACT_ENCODING):
        if format != "csv":
            raise WriteError(f"Unsupported output format: {format}")
        return CsvRowWriter(path, encoding=encoding)


def default_id_factory() -> str:
    return uuid.uuid4().hex[:12]


class FixedWidthConverter:

    def __init__(self, writer=None, id_factory=None, prefix=TEMP_PREFIX,
                 threshold=FIXED_WIDTH_GAP_THRESHOLD, tmp_dir=None):
        self.writer = writer or CsvSpreadsheetWriter()
        self.id_factory = id_factory or default_id_factory
        self.prefix = prefix
        self.threshold = threshold
        self.tmp_dir = tmp_dir

    def _new_artifact(self) -> Path:
        try:
            tmp = tempfile.NamedTemporaryFile(
                delete=False,
                prefix=f"{self.prefix}-{self.id_factory()}-",
                suffix=".csv",
                dir=self.tmp_dir,
            )
            tmp.close()
        except OSError as e:
            raise WriteError(f"Cannot create temporary CSV file: {e}") from e
        return Path(tmp.name)

    def convert(self, raw_lines) -> Path:
        """
        Write the fixed-width lines as CSV rows into a new temporary file
        and return its path. The caller removes it (see ``converted``).
        """
        lines = [line for line in raw_lines if line.strip()]
        rule = build_rule(lines, threshold=self.threshold)

        path = self._new_artifact()
        try:
            out = self.writer.create(path, format="csv", encoding=ARTIFACT_ENCODING)
            try:
                for line in lines:
                    out.add_row(apply(line, rule))
            finally:
                out.close()
        except WriteError:
            _remove(path)
            raise
        except OSError as e:
            _remove(path)
            raise WriteError(f"Cannot write temporary CSV file {path}: {e}") from e

        logger.info(f"Converted {len(lines)} fixed-width lines into {rule.width} columns: {path}")
        return path

    @contextmanager
    def converted(self, raw_lines):
        path = self.convert(raw_lines)
        try:
            yield path
        finally:
            _remove(path)


def _remove(path):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {path}: {e}")
