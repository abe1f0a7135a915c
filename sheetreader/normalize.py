import pandas as pd


def detect_field_type(series: pd.Series) -> str:
    """
    Type detection over string-ish cell values: boolean, integer,
    decimal, date-like, otherwise text.
    """

    # Convert DataFrame column → Series if needed
    if isinstance(series, pd.DataFrame):
        series = series.iloc[:, 0]

    s = series.dropna().astype(str).str.strip()
    s = s[s != ""]

    if s.empty:
        return "text"

    # Boolean
    if s.str.lower().isin(["true", "false", "yes", "no"]).all():
        return "boolean"

    # Integer
    if s.str.match(r"^-?\d+$").all():
        return "number"

    # Decimal
    if s.str.match(r"^-?\d+\.\d+$").all():
        return "decimal"

    # Date
    parsed = pd.to_datetime(s, errors="coerce", format="mixed")
    if parsed.notna().all():
        return "datetime"

    return "text"


def normalize_table(columns, rows):
    """
    Turn a header row plus data rows into the unified record structure:
    - fixes empty/duplicate headers
    - pads ragged rows
    - removes empty columns
    - detects types
    - converts NaN → None
    """

    width = max([len(columns)] + [len(r) for r in rows]) if (columns or rows) else 0

    # ---------------------------------------------
    # 1. Safe headers
    # ---------------------------------------------
    columns = list(columns) + [None] * (width - len(columns))

    # Fix blank headers
    columns = [
        str(col).strip() if col is not None and str(col).strip() != "" else f"Column_{i+1}"
        for i, col in enumerate(columns)
    ]

    # Fix duplicate headers
    seen = {}
    unique_cols = []
    for col in columns:
        if col not in seen:
            seen[col] = 0
            unique_cols.append(col)
        else:
            seen[col] += 1
            unique_cols.append(f"{col}_{seen[col]}")

    # ---------------------------------------------
    # 2. Fix ragged rows (make all same length)
    # ---------------------------------------------
    padded = [list(r) + [None] * (width - len(r)) for r in rows]
    df = pd.DataFrame(padded, columns=unique_cols, dtype=object)

    # ---------------------------------------------
    # 3. Drop columns that are fully empty
    # ---------------------------------------------
    def is_empty_column(series):
        cleaned = (
            series.dropna()
                  .astype(str)
                  .str.strip()
                  .str.lower()
        )
        return cleaned.empty or cleaned.isin(["", "nan"]).all()

    non_empty_cols = [col for col in df.columns if not is_empty_column(df[col])]
    df = df[non_empty_cols]

    # ---------------------------------------------
    # 4. Detect field types
    # ---------------------------------------------
    field_types = {
        col: detect_field_type(df[col])
        for col in df.columns
    }

    # ---------------------------------------------
    # 5. Convert NaN to None
    # ---------------------------------------------
    df = df.where(df.notna() & (df != ""), None)

    return {
        "columns": list(df.columns),
        "rows": df.to_dict(orient="records"),
        "field_types": field_types,
    }
