"""Run script.

Lets the CLI run with `python -m main` from inside `src/`, alongside the
`incapsula-site` console script.
"""

from __future__ import annotations

import sys

# Rich tables on Windows terminals (cp1252 vs utf-8).
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
