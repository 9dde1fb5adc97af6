import json
from pathlib import Path
from typing import Any, Dict

from .models import RunResult


def save_run(path: Path, result: RunResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)


def load_run(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {"data": {}}
    try:
        with path.open("r", encoding="utf-8") as f:
            content = f.read().strip()
            if not content:
                return {"data": {}}
            return json.loads(content)
    except (json.JSONDecodeError, IOError):
        return {"data": {}}
