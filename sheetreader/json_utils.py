import math

import pandas as pd
import numpy as np
from datetime import datetime, date, time


def to_python(value):
    """
    Convert a single pandas / numpy cell value into a plain Python value.
    NaN / NaT become None.
    """

    if value is None:
        return None

    if value is pd.NaT:
        return None

    # ---- pandas / numpy ----
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()

    if isinstance(value, np.bool_):
        return bool(value)

    if isinstance(value, np.integer):
        return int(value)

    if isinstance(value, np.floating):
        value = float(value)

    if isinstance(value, float) and math.isnan(value):
        return None

    return value


def make_json_safe(obj):
    """
    Recursively convert pandas / numpy / datetime objects
    into JSON-serializable Python primitives.
    """

    if isinstance(obj, (pd.Timestamp, datetime, date, time)):
        return obj.isoformat()

    if isinstance(obj, (np.ndarray,)):
        return [make_json_safe(v) for v in obj.tolist()]

    # ---- containers ----
    if isinstance(obj, dict):
        return {k: make_json_safe(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [make_json_safe(v) for v in obj]

    converted = to_python(obj)
    if converted is not obj:
        return make_json_safe(converted) if converted is not None else None

    return obj
