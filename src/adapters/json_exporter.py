"""Exportación JSON del resultado de un comando.

Por qué JSON:
- Interoperabilidad con otras herramientas (hojas de cálculo, CRMs, pipelines).
- Permite guardar la respuesta cruda de la plataforma sin re-formatearla.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.domain.models import CommandResult


def result_payload(result: CommandResult[Any]) -> Any:
    """Valor en éxito; `{"error": {...}}` en fallo."""

    if result.error is None:
        return result.value
    return {"error": result.error.to_dict()}


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True, default=str)


def export_result_json(*, result: CommandResult[Any], output_path: Path) -> Path:
    """Exporta el resultado a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps(result_payload(result)) + "\n", encoding="utf-8")
    return output_path
