from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class WindowConfig:
    width: int = 900
    height: int = 700
    fps: int = 60
    title: str = "Category Switch"


@dataclass(frozen=True)
class BlockParams:
    n_trials: int = 30
    switch_rate: float = 0.35  # вероятность смены правила между trial-ами
    rules: tuple = ("living", "length")


@dataclass(frozen=True)
class SessionConfig:
    feedback_ms: int = 500  # пауза с фидбеком перед следующим trial-ом
    seed: Optional[int] = None
    export_path: Optional[str] = None  # jsonl с итогами, если задан
    block: BlockParams = BlockParams()
