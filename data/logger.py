import json
from pathlib import Path
from typing import Any, Dict


class JsonlLogger:
    """Дописывает по одной JSON-строке на запись. Файл только пишется, обратно не читается."""

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, record: Dict[str, Any]) -> None:
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
