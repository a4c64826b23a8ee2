"""Persistencia de config por plataforma en ficheros JSON.

Layout:
- `<config_dir>/platforms/<platform>.json` con `{apiKey, baseUrl, lastUsed}`.

Escritura atómica:
- Se escribe a un temporal en el mismo directorio y se hace `os.replace`.
  Un corte a mitad de escritura deja el fichero original intacto.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from core.domain.models import PlatformConfig

logger = logging.getLogger(__name__)


class JsonFileConfigRepository:
    def __init__(self, config_dir: Path) -> None:
        self._dir = Path(config_dir) / "platforms"

    @property
    def directory(self) -> Path:
        return self._dir

    def path_for(self, platform: str) -> Path:
        safe = "".join(ch for ch in platform.lower() if ch.isalnum() or ch in ("-", "_"))
        if not safe:
            raise ValueError(f"Invalid platform key: {platform!r}")
        return self._dir / f"{safe}.json"

    def load(self, platform: str) -> PlatformConfig:
        path = self.path_for(platform)
        if not path.exists():
            return PlatformConfig()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError("config root must be a JSON object")
            return PlatformConfig.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning("Ignoring unreadable config file %s: %s", path, exc)
            return PlatformConfig()

    def save(self, platform: str, config: PlatformConfig) -> None:
        path = self.path_for(platform)
        payload = json.dumps(config.to_file_payload(), ensure_ascii=False, indent=2, sort_keys=True) + "\n"
        write_atomic(path, payload)

    def delete(self, platform: str) -> bool:
        path = self.path_for(platform)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        return True


def write_atomic(path: Path, text: str, *, mode: int = 0o600) -> Path:
    """Escribe `text` en `path` vía temporal + rename."""

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return path
