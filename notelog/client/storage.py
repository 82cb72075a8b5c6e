"""
Persistenza locale del client su file JSON (chiavi promemoria, bozze).
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def read_json(path: Path, default: Any) -> Any:
    """Contenuto del file, oppure ``default`` se manca o è illeggibile."""
    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.warning("File locale illeggibile: %s", path, exc_info=True)
        return default


def write_json_atomic(path: Path, data: Any) -> None:
    """Scrive su file temporaneo e poi sostituisce: mai un file a metà."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    os.replace(tmp_path, path)
