import sys
from pathlib import Path
import datetime

from sheetreader.errors import SpreadsheetReadError
from sheetreader.router import read_data_simple
from storage.file_saver import FileSaver
from config.logger import logger


def parse_cli_options(args):
    """
    ``key=value`` arguments → option dict.
    """
    options = {}
    for arg in args:
        if "=" not in arg:
            raise SystemExit(f"Options must look like key=value, got: {arg}")
        key, value = arg.split("=", 1)
        options[key.strip()] = value
    return options


def run(argv=None):
    """
    Manual local testing utility: load one file, print it, save JSON/CSV.
    """

    argv = list(sys.argv[1:] if argv is None else argv)

    if argv:
        file_path, options = argv[0], parse_cli_options(argv[1:])
    else:
        file_path, options = input("Enter path of file to parse: ").strip(), {}

    logger.info(f"Parsing: {file_path} {options or ''}")

    try:
        table = read_data_simple(file_path, **options)
    except SpreadsheetReadError as e:
        logger.error(f"❌ {e}")
        return 1

    filename = Path(file_path).stem
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")
    paths = FileSaver.save_table(table, f"{filename}_{timestamp}")
    for path in paths:
        logger.info(f"Saved output to: {path}")

    print("\n" + "=" * 60)
    print(f"PARSED {file_path} ({table.parser}, {table.origin})")
    print("=" * 60)
    for sheet in table.sheets:
        print(f"[{sheet.label}] {sheet.maxrow} rows x {sheet.maxcol} columns")
        for row in sheet.rows[:10]:
            print("  " + " | ".join("" if v is None else str(v) for v in row))
        if sheet.maxrow > 10:
            print(f"  ... {sheet.maxrow - 10} more rows")
    for warning in table.warnings:
        print(f"⚠️  {warning}")
    print("=" * 60 + "\n")

    return 0


if __name__ == "__main__":
    sys.exit(run())
