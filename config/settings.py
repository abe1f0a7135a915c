from pathlib import Path
import os
from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env
load_dotenv(os.path.join(BASE_DIR, ".env"))

LOG_LEVEL = os.getenv("SHEETREADER_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("SHEETREADER_LOG_FILE")

OUTPUT_DIR = Path(os.getenv("SHEETREADER_OUTPUT_DIR", BASE_DIR / "output"))

# ---------- Detection / conversion tunables ----------
# Share of sampled lines that must be blank at an offset for it to count
# as a column gap. 1.0 means "blank in every line".
FIXED_WIDTH_GAP_THRESHOLD = 1.0

SEPARATOR_SAMPLE_LINES = 100
SEPARATOR_CANDIDATES = (",", ";", ":", "|", "\t")

TEMP_PREFIX = "sheetreader"
TEXT_ENCODINGS = ("utf-8-sig", "latin-1")
ARTIFACT_ENCODING = "utf-8"
