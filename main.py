"""Ejecución desde el checkout, sin instalar el paquete.

    python main.py exec smartlead campaigns:list --args '{"limit": 5}'

El código vive en `src/`; el script `cec` instalado con pip no necesita esto.
"""

from __future__ import annotations

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"

if __name__ == "__main__":
    if str(SRC_DIR) not in sys.path:
        sys.path.insert(0, str(SRC_DIR))

    from cli.main import run  # noqa: E402

    run()
