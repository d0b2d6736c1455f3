"""Precompute the Timpanogos viewpoint ring into the static JSON file served to the chart."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from peakview.__main__ import DEFAULT_OUTPUT_PATH, main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(["generate", "--output", str(ROOT / DEFAULT_OUTPUT_PATH), *sys.argv[1:]]))
