"""Run the CLI from a checkout: `python -m main ...`.

Puts `src/` on the import path first, so no install is needed.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parent / "src"


def main() -> None:
    sys.path.insert(0, str(SRC))
    from cli.main import run  # noqa: PLC0415

    run()


if __name__ == "__main__":
    main()
