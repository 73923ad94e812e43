"""Run script: `python -m main` from inside `src/`."""

from __future__ import annotations

import sys

# Windows CI agents default to cp1252; payloads and bodies are UTF-8.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
