import math
from dataclasses import dataclass, fields
from typing import Dict

from game.rules import Answer, Rule


@dataclass(frozen=True)
class Trial:
    """
    Что нужно показать в конкретном trial-е
    """
    trial_index: int
    word: str
    rule: Rule
    is_switch: bool        # правило отличается от предыдущего trial-а


@dataclass(frozen=True)
class TrialResult:
    """
    Результат попытки - что ответил игрок и сколько думал
    """
    trial_index: int
    word: str
    rule: Rule
    correct_answer: Answer
    user_answer: Answer
    correct: bool
    rt_ms: int
    is_switch: bool

    def to_dict(self) -> dict:
        return {
            "trial": self.trial_index + 1,
            "word": self.word,
            "rule": self.rule.value,
            "correct_answer": self.correct_answer.value,
            "user_answer": self.user_answer.value,
            "correct": self.correct,
            "rt_ms": self.rt_ms,
            "is_switch": self.is_switch,
        }


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class SessionSummary:
    total_trials: int = 0
    switch_trials: int = 0
    stay_trials: int = 0
    switch_accuracy: float = 0.0
    stay_accuracy: float = 0.0
    switch_rt: float = 0.0
    stay_rt: float = 0.0
    switch_cost_rt: float = 0.0
    switch_cost_acc: float = 0.0
    overall_accuracy: float = 0.0

    def rounded(self) -> Dict[str, int]:
        """Значения для экрана результатов (целые проценты и мс)."""
        return {f.name: round_half_up(getattr(self, f.name)) for f in fields(self)}
