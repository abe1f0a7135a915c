import json
import csv
from config.settings import OUTPUT_DIR
from sheetreader.json_utils import make_json_safe


class FileSaver:

    @staticmethod
    def _target(subdir, filename, output_dir=None):
        folder = (output_dir or OUTPUT_DIR) / subdir
        folder.mkdir(parents=True, exist_ok=True)
        return folder / filename

    @staticmethod
    def save_json(data, filename, output_dir=None):
        path = FileSaver._target("json", filename, output_dir)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(make_json_safe(data), f, indent=4)
        return path

    @staticmethod
    def save_csv(rows, filename, output_dir=None):
        """Write plain list rows (one sheet) as CSV."""
        path = FileSaver._target("csv", filename, output_dir)

        cleaned_rows = [
            ["" if val is None else make_json_safe(val) for val in row]
            for row in rows
        ]

        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerows(cleaned_rows)
        return path

    @staticmethod
    def save_table(table, basename, output_dir=None):
        """Save the unified JSON plus one CSV per sheet; returns all paths."""
        paths = [FileSaver.save_json(table.to_dict(), f"{basename}.json", output_dir)]
        for idx, sheet in enumerate(table.sheets, start=1):
            if sheet.rows:
                paths.append(
                    FileSaver.save_csv(sheet.rows, f"{basename}_sheet_{idx}.csv", output_dir)
                )
        return paths
