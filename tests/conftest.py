import pytest

from sheetreader.table import Sheet, Table

FIXED_WIDTH_LINES = [
    "ID   NAME   AGE",
    "1    Alice  30",
    "2    Bob    25",
]


class FakeReader:
    """Records every call and returns a canned table (or raises)."""

    def __init__(self, rows=None, error=None):
        self.rows = rows if rows is not None else [["a", "b"], ["1", "2"]]
        self.error = error
        self.calls = []

    def read(self, source, options):
        self.calls.append((source, dict(options)))
        if self.error is not None:
            raise self.error
        return Table([Sheet("fake", self.rows)], parser=options.get("parser"))


class FakeInspector:

    def __init__(self, mimetype):
        self._mimetype = mimetype
        self.calls = []

    def mimetype(self, path):
        self.calls.append(path)
        return self._mimetype


class FakeDetector:

    def __init__(self, result=None):
        self.result = list(result or [])
        self.calls = []

    def detect(self, path, include=(" ",)):
        self.calls.append((path, list(include)))
        return list(self.result)


class RecordingWriter:
    """SpreadsheetWriter that keeps rows in memory and writes nothing."""

    def __init__(self, fail_on_row=None):
        self.created = []
        self.rows = []
        self.closed = False
        self.fail_on_row = fail_on_row

    def create(self, path, format="csv", encoding="utf-8"):
        self.created.append((path, format, encoding))
        return self

    def add_row(self, fields):
        if self.fail_on_row is not None and len(self.rows) == self.fail_on_row:
            raise OSError("disk full")
        self.rows.append(list(fields))

    def close(self):
        self.closed = True


@pytest.fixture
def fixed_width_file(tmp_path):
    path = tmp_path / "people.txt"
    path.write_text("\n".join(FIXED_WIDTH_LINES) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def artifact_dir(tmp_path):
    path = tmp_path / "artifacts"
    path.mkdir()
    return path
