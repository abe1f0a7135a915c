import io

import pytest
from openpyxl import Workbook

from sheetreader.backends.pandas_reader import PandasSpreadsheetReader
from sheetreader.errors import (
    BackendError,
    BadOptionCountError,
    InvalidInputError,
    SourceNotFoundError,
    UnknownFormatError,
    WriteError,
)
from sheetreader.interfaces import TableLike
from sheetreader.router import (
    ReadDataSimple,
    SimpleReader,
    collect_options,
    normalize_separator,
    read_data_simple,
)
from sheetreader.table import FIXED_WIDTH, NATIVE
from conftest import FIXED_WIDTH_LINES, FakeDetector, FakeInspector, FakeReader, RecordingWriter


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("space", " "),
        ("Spaces", " "),
        ("whitespace", " "),
        ("WHITESPACES", " "),
        ("tab", "\t"),
        ("tabs", "\t"),
        ("Tabulator", "\t"),
        ("tabulators", "\t"),
        (";", ";"),
        ("spacey", "spacey"),
        (None, None),
    ],
)
def test_separator_aliases(alias, expected):
    assert normalize_separator(alias) == expected


def test_collect_options_merges_pairs_and_keywords():
    params = collect_options(("sep", "tab", "parser", "CSV"), {"quote": "'"})

    assert params == {"sep": "\t", "parser": "csv", "quote": "'"}
    assert collect_options((), {"separator": "space"}) == {"sep": " "}


def test_odd_option_count_fails_before_touching_source(tmp_path):
    missing = tmp_path / "missing.csv"

    with pytest.raises(BadOptionCountError):
        SimpleReader().load(missing, "sep")

    assert issubclass(BadOptionCountError, InvalidInputError)


def test_undefined_source():
    with pytest.raises(InvalidInputError, match="Undefined source"):
        read_data_simple(None)


def test_missing_file_fails_without_writes(tmp_path, artifact_dir):
    writer = RecordingWriter()
    reader = FakeReader()
    loader = SimpleReader(reader=reader, writer=writer, tmp_dir=artifact_dir)

    with pytest.raises(SourceNotFoundError, match="File not found"):
        loader.load(tmp_path / "nope.txt")

    with pytest.raises(FileNotFoundError):
        loader.load(tmp_path)

    assert writer.created == []
    assert reader.calls == []
    assert list(artifact_dir.iterdir()) == []


def test_fixed_width_text_end_to_end(fixed_width_file, artifact_dir):
    table = SimpleReader(tmp_dir=artifact_dir).load(str(fixed_width_file))

    assert isinstance(table, TableLike)
    assert table.parser == "csv"
    assert table.separator == " "
    assert table.origin == FIXED_WIDTH
    assert table.sheet_count == 1
    assert table.sheet(1).label == "people.txt"
    assert table.sheet(1).row(1) == ["ID", "NAME", "AGE"]
    assert table.sheet(1).row(2) == ["1", "Alice", "30"]
    assert table.sheet(1).cell(2, 3) == "Bob"
    assert list(artifact_dir.iterdir()) == []


def test_fixed_width_backend_call(fixed_width_file, artifact_dir):
    reader = FakeReader(rows=[["1", "Alice", "30"]])
    loader = SimpleReader(
        reader=reader,
        mime_inspector=FakeInspector("text/plain"),
        separator_detector=FakeDetector([" ", ","]),
        tmp_dir=artifact_dir,
    )

    table = loader.load(fixed_width_file)

    (artifact, options), = reader.calls
    assert artifact != fixed_width_file
    assert artifact.parent == artifact_dir
    assert options == {"parser": "csv", "sep": ",", "clip": 1, "strip": 3}
    assert not artifact.exists()
    assert table.origin == FIXED_WIDTH


def test_xlsx_goes_straight_to_backend(tmp_path):
    wb = Workbook()
    wb.active.append(["A", "B"])
    wb.active.append([1, 2])
    path = tmp_path / "book.xlsx"
    wb.save(path)

    table = read_data_simple(path)
    native = PandasSpreadsheetReader().read(path, {"parser": "xlsx"})

    assert table.parser == "xlsx"
    assert table.origin == NATIVE
    assert table.separator is None
    assert [s.rows for s in table.sheets] == [s.rows for s in native.sheets]
    assert table.sheet(1).row(1) == ["A", "B"]
    assert table.sheet(1).row(2) == [1, 2]


def test_explicit_tab_separator_skips_detection(tmp_path):
    path = tmp_path / "data.tsv"
    path.write_text("a\tb\n1\t2\n", encoding="utf-8")
    detector = FakeDetector([","])
    inspector = FakeInspector("text/plain")

    table = SimpleReader(separator_detector=detector, mime_inspector=inspector).load(
        path, parser="csv", sep="tab"
    )

    assert detector.calls == []
    assert inspector.calls == []
    assert table.separator == "\t"
    assert table.origin == NATIVE
    assert table.sheet(1).rows == [["a", "b"], ["1", "2"]]


def test_explicit_options_pass_through_unchanged(tmp_path):
    path = tmp_path / "semi.csv"
    path.write_text("x;y\n3;4\n", encoding="utf-8")

    table = ReadDataSimple(path, "parser", "csv", "sep", ";", "skiprows", 1)
    direct = PandasSpreadsheetReader().read(path, {"parser": "csv", "sep": ";", "skiprows": 1})

    assert [s.rows for s in table.sheets] == [s.rows for s in direct.sheets] == [[["3", "4"]]]

    reader = FakeReader()
    SimpleReader(reader=reader).load(path, parser="CSV", sep=";", skiprows=1)
    assert reader.calls == [(path, {"parser": "csv", "sep": ";", "skiprows": 1})]


def test_detected_separator_is_used(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a|b\n1|2\n", encoding="utf-8")

    table = read_data_simple(path)

    assert table.separator == "|"
    assert table.sheet(1).rows == [["a", "b"], ["1", "2"]]
    assert table.warnings == []


def test_failed_detection_is_a_warning(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("alpha\nbeta\n", encoding="utf-8")

    table = read_data_simple(path)

    assert table.separator is None
    assert table.sheet(1).rows == [["alpha"], ["beta"]]
    assert table.warnings == [f"Failed to auto-detect separator for {path}"]


def test_unknown_format_fails_after_dispatch(tmp_path):
    path = tmp_path / "blob.bin"
    path.write_bytes(b"\x00\x01\x02\x03")
    reader = FakeReader()

    with pytest.raises(UnknownFormatError):
        SimpleReader(reader=reader).load(path)

    assert reader.calls == []


def test_unknown_explicit_parser(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n", encoding="utf-8")

    with pytest.raises(UnknownFormatError, match="json"):
        read_data_simple(path, parser="json")


def test_stream_needs_explicit_parser():
    with pytest.raises(UnknownFormatError):
        read_data_simple(io.StringIO("a,b\n1,2\n"))


def test_stream_skips_metadata_detection():
    detector = FakeDetector([";"])
    inspector = FakeInspector("text/csv")
    loader = SimpleReader(separator_detector=detector, mime_inspector=inspector)

    table = loader.load(io.StringIO("a,b\n1,2\n"), parser="csv", sep=",")

    assert detector.calls == [] and inspector.calls == []
    assert table.source is None
    assert table.sheet(1).rows == [["a", "b"], ["1", "2"]]


def test_fixed_width_stream(artifact_dir):
    stream = io.BytesIO("\n".join(FIXED_WIDTH_LINES).encode("utf-8"))

    table = SimpleReader(tmp_dir=artifact_dir).load(stream, parser="csv", sep="whitespace")

    assert table.origin == FIXED_WIDTH
    assert table.sheet(1).label == "sheet1"
    assert table.sheet(1).row(3) == ["2", "Bob", "25"]


def test_backend_error_on_direct_dispatch(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n", encoding="utf-8")
    loader = SimpleReader(reader=FakeReader(error=RuntimeError("corrupt")))

    with pytest.raises(BackendError, match="corrupt") as excinfo:
        loader.load(path, parser="csv", sep=",")

    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_backend_error_on_artifact_is_write_error(fixed_width_file, artifact_dir):
    loader = SimpleReader(reader=FakeReader(error=RuntimeError("corrupt")), tmp_dir=artifact_dir)

    with pytest.raises(WriteError):
        loader.load(fixed_width_file, parser="csv", sep="space")

    assert list(artifact_dir.iterdir()) == []


def test_loading_twice_gives_same_cells(fixed_width_file, artifact_dir):
    loader = SimpleReader(tmp_dir=artifact_dir)

    first = loader.load(fixed_width_file)
    second = loader.load(fixed_width_file)

    assert [s.rows for s in first.sheets] == [s.rows for s in second.sheets]
    assert first.sheet(1).rows is not second.sheet(1).rows


def test_gap_threshold_is_configurable(tmp_path, artifact_dir):
    path = tmp_path / "noisy.txt"
    path.write_text("aa bb\naa bb\naaxbb\n", encoding="utf-8")

    strict = SimpleReader(tmp_dir=artifact_dir).load(path, parser="csv", sep=" ")
    loose = SimpleReader(tmp_dir=artifact_dir, gap_threshold=0.5).load(path, parser="csv", sep=" ")

    assert strict.sheet(1).maxcol == 1
    assert loose.sheet(1).rows == [["aa", "bb"], ["aa", "bb"], ["aax", "bb"]]


def test_ragged_csv_loads(tmp_path):
    path = tmp_path / "ragged.csv"
    path.write_text("a,b\n1,2,3\n4,5\n", encoding="utf-8")

    table = read_data_simple(path)

    assert table.separator == ","
    assert table.sheet(1).maxcol == 3
    assert table.sheet(1).row(2) == ["1", "2", "3"]


def test_backend_keywords_pass_through(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n", encoding="utf-8")

    table = read_data_simple(path, parser="csv", sep=",", header=0)

    assert table.sheet(1).rows == [["1", "2"]]


def test_tsv_is_classified_as_csv(tmp_path):
    path = tmp_path / "data.tsv"
    path.write_text("a\tb\n1\t2\n", encoding="utf-8")

    table = read_data_simple(path)

    assert table.parser == "csv"
    assert table.separator == "\t"
    assert table.sheet(1).rows == [["a", "b"], ["1", "2"]]
