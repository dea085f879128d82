"""Make the src/ layout importable when running pytest from a checkout."""

import sys
from pathlib import Path

SRC = str(Path(__file__).parent / "src")

if SRC not in sys.path:
    sys.path.insert(0, SRC)
