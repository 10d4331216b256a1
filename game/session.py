import logging
import random
from typing import List, Optional

from config.settings import SessionConfig
from data.models import SessionSummary, Trial, TrialResult
from game.errors import SessionStateError
from game.scoring import score_response
from game.session_metrics import compute_summary
from game.state_machine import (
    INFO_CHAIN,
    PHASE_PRACTICE_COMPLETE,
    PHASE_PRACTICE_INTRO,
    PHASE_RESULTS,
    PHASE_TESTING,
    PHASE_WELCOME,
    PhaseMachine,
)
from game.trial_generator import generate_main_block, generate_practice_block, validate_block_params

logger = logging.getLogger(__name__)


class Session:
    """
    Всё состояние одной сессии в одном объекте.

    Время (now_ms) всегда передаётся снаружи: сцена берёт его из pygame,
    тесты подставляют любые числа.

    После ответа trial не сменяется сразу: ставим отложенный переход
    (advance_at_ms) и выполняем его в update(), когда пройдёт feedback_ms.
    Пока переход ждёт, новые ответы не принимаются.
    """

    def __init__(self, config: SessionConfig, rng: Optional[random.Random] = None) -> None:
        # ошибки конфигурации ловим сразу, а не после тренировки
        validate_block_params(config.block)
        if config.feedback_ms < 0:
            raise ValueError(f"feedback_ms must not be negative, got {config.feedback_ms}")
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)
        self.machine = PhaseMachine()

        self.is_practice: bool = False
        self.trials: List[Trial] = []
        self.results: List[TrialResult] = []
        self.current_index: int = 0
        self.trial_started_ms: Optional[int] = None
        self.advance_at_ms: Optional[int] = None

    @property
    def phase(self) -> str:
        return self.machine.phase

    # -----------------------
    # Информационные экраны
    # -----------------------

    def next_screen(self) -> str:
        target = INFO_CHAIN.get(self.phase)
        if target is None:
            raise SessionStateError(f"No informational screen follows {self.phase}")
        return self.machine.go(target)

    # -----------------------
    # Запуск блоков
    # -----------------------

    def start_practice_session(self, now_ms: int) -> None:
        if self.phase != PHASE_PRACTICE_INTRO:
            raise SessionStateError(f"Practice can only start from {PHASE_PRACTICE_INTRO}, not {self.phase}")
        self.machine.go(PHASE_TESTING)
        self._begin_block(generate_practice_block(), now_ms, is_practice=True)

    def start_main_session(self, now_ms: int) -> None:
        if self.phase != PHASE_PRACTICE_COMPLETE:
            raise SessionStateError(f"Main test can only start from {PHASE_PRACTICE_COMPLETE}, not {self.phase}")
        self.machine.go(PHASE_TESTING)
        self._begin_block(generate_main_block(self.config.block, self.rng), now_ms, is_practice=False)

    def _begin_block(self, trials: List[Trial], now_ms: int, is_practice: bool) -> None:
        self.is_practice = is_practice
        self.trials = trials
        self.results = []
        self.current_index = 0
        self.trial_started_ms = now_ms
        self.advance_at_ms = None
        logger.info("Started %s block with %d trials", "practice" if is_practice else "main", len(trials))

    # -----------------------
    # Trial-ы
    # -----------------------

    def current_trial(self) -> Optional[Trial]:
        if self.phase != PHASE_TESTING or self.current_index >= len(self.trials):
            return None
        return self.trials[self.current_index]

    def is_awaiting_response(self) -> bool:
        return self.current_trial() is not None and self.advance_at_ms is None

    def submit_response(self, answer, now_ms: int) -> TrialResult:
        if not self.is_awaiting_response():
            raise SessionStateError(f"Not awaiting a response (phase {self.phase})")

        trial = self.trials[self.current_index]
        result = score_response(trial, answer, now_ms - self.trial_started_ms)
        self.results.append(result)
        self.advance_at_ms = now_ms + self.config.feedback_ms

        logger.debug(
            "Trial %d: word=%s rule=%s answer=%s correct=%s rt=%dms switch=%s",
            result.trial_index,
            result.word,
            result.rule.value,
            result.user_answer.value,
            result.correct,
            result.rt_ms,
            result.is_switch,
        )
        return result

    def update(self, now_ms: int) -> bool:
        """
        Выполняет отложенный переход, если время пришло.

        Возвращает True, если перешли к следующему trial-у или закончили блок.
        """
        if self.advance_at_ms is None or now_ms < self.advance_at_ms:
            return False
        self.advance_at_ms = None

        if self.current_index < len(self.trials) - 1:
            self.current_index += 1
            self.trial_started_ms = now_ms
            return True

        # блок закончился
        self.current_index = len(self.trials)
        self.trial_started_ms = None
        if self.is_practice:
            self.machine.go(PHASE_PRACTICE_COMPLETE)
            logger.info("Practice block complete")
        else:
            self.machine.go(PHASE_RESULTS)
            summary = self.compute_summary()
            logger.info(
                "Main block complete: accuracy=%.1f%% switch_cost_rt=%.1fms switch_cost_acc=%.1f%%",
                summary.overall_accuracy,
                summary.switch_cost_rt,
                summary.switch_cost_acc,
            )
        return True

    @property
    def last_result(self) -> Optional[TrialResult]:
        return self.results[-1] if self.results else None

    @property
    def feedback(self) -> Optional[str]:
        """"correct" / "wrong", пока висит пауза после ответа, иначе None."""
        if self.advance_at_ms is None or self.last_result is None:
            return None
        return "correct" if self.last_result.correct else "wrong"

    @property
    def progress(self) -> float:
        if not self.trials:
            return 0.0
        return min(self.current_index + 1, len(self.trials)) / len(self.trials)

    # -----------------------
    # Итоги и сброс
    # -----------------------

    def is_complete(self) -> bool:
        return bool(self.trials) and len(self.results) == len(self.trials)

    def compute_summary(self) -> SessionSummary:
        # на неполных данных всё равно считаем: пустые группы дают нули
        if not self.is_complete():
            logger.warning("Summary requested with %d/%d trials answered", len(self.results), len(self.trials))
        return compute_summary(self.results)

    def reset(self) -> None:
        if self.phase != PHASE_RESULTS:
            raise SessionStateError(f"Reset is only allowed from {PHASE_RESULTS}, not {self.phase}")
        self.machine.go(PHASE_WELCOME)
        self._clear()
        logger.info("Session reset")

    def _clear(self) -> None:
        self.is_practice = False
        self.trials = []
        self.results = []
        self.current_index = 0
        self.trial_started_ms = None
        self.advance_at_ms = None
