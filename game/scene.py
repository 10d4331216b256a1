import logging
from typing import Callable, Dict, Optional

import pygame

from config.settings import SessionConfig
from data.logger import JsonlLogger
from data.models import SessionSummary
from game.input import ACTION_NEXT, ACTION_NO, ACTION_YES, InputManager
from game.renderer import Renderer
from game.rules import Answer
from game.session import Session
from game.state_machine import (
    INFO_CHAIN,
    PHASE_HOW,
    PHASE_PRACTICE_COMPLETE,
    PHASE_PRACTICE_INTRO,
    PHASE_RESULTS,
    PHASE_TESTING,
    PHASE_WELCOME,
    PHASE_WHAT,
)

logger = logging.getLogger(__name__)


ACTION_TO_ANSWER = {ACTION_YES: Answer.YES, ACTION_NO: Answer.NO}


class GameScene:
    """
    GameScene = вся сессия от приветствия до результатов.

    Она объединяет:
    - состояние сессии (Session: trial-ы, ответы, фазы)
    - ввод (input)
    - отрисовку (renderer)

    В main.py сцена получает события pygame и update() каждый кадр.
    clock_ms можно подменить в тестах, по умолчанию это pygame.time.get_ticks.
    """

    def __init__(
        self,
        renderer: Renderer,
        input_manager: InputManager,
        config: SessionConfig,
        session: Optional[Session] = None,
        clock_ms: Callable[[], int] = pygame.time.get_ticks,
    ):
        self.renderer = renderer
        self.input = input_manager
        self.config = config
        self.session = session if session is not None else Session(config)
        self.clock_ms = clock_ms

        self.exporter = JsonlLogger(config.export_path) if config.export_path else None

        # итоги считаем один раз при входе в RESULTS
        self.summary: Optional[SessionSummary] = None

    def handle_event(self, event) -> None:
        self.input.process_pygame_event(event)

    def update(self) -> None:
        now_ms = self.clock_ms()

        # 1) Отложенный переход после ответа (пауза с фидбеком)
        if self.session.update(now_ms):
            self.input.reset()
            if self.session.phase == PHASE_RESULTS:
                self._on_results()

        # 2) Действие игрока
        action = self.input.poll_action()
        if action is not None:
            self._dispatch(action, now_ms)

        # 3) Рисуем текущий экран
        self._render()

    def _dispatch(self, action: str, now_ms: int) -> None:
        phase = self.session.phase

        if phase == PHASE_TESTING:
            if action in ACTION_TO_ANSWER and self.session.is_awaiting_response():
                self.session.submit_response(ACTION_TO_ANSWER[action], now_ms)
            return

        if action != ACTION_NEXT:
            return

        if phase in INFO_CHAIN:
            self.session.next_screen()
        elif phase == PHASE_PRACTICE_INTRO:
            self.session.start_practice_session(now_ms)
        elif phase == PHASE_PRACTICE_COMPLETE:
            self.session.start_main_session(now_ms)
        elif phase == PHASE_RESULTS:
            self.session.reset()
            self.summary = None
        self.input.reset()

    def _on_results(self) -> None:
        self.summary = self.session.compute_summary()
        if self.exporter is not None:
            self.exporter.write(
                {
                    "summary": self.summary.rounded(),
                    "trials": [r.to_dict() for r in self.session.results],
                }
            )
            logger.info("Exported session results to %s", self.exporter.path)

    def _render(self) -> None:
        phase = self.session.phase
        self.renderer.clear()

        targets: Dict[str, pygame.Rect] = {}
        if phase == PHASE_WELCOME:
            targets = self.renderer.draw_welcome()
        elif phase == PHASE_WHAT:
            targets = self.renderer.draw_what()
        elif phase == PHASE_HOW:
            targets = self.renderer.draw_how()
        elif phase == PHASE_PRACTICE_INTRO:
            targets = self.renderer.draw_practice_intro()
        elif phase == PHASE_TESTING:
            trial = self.session.current_trial()
            if trial is not None:
                targets = self.renderer.draw_trial(trial, self.session.progress, self.session.feedback)
        elif phase == PHASE_PRACTICE_COMPLETE:
            targets = self.renderer.draw_practice_complete(self.config.block.n_trials)
        elif phase == PHASE_RESULTS:
            summary = self.summary if self.summary is not None else self.session.compute_summary()
            targets = self.renderer.draw_results(summary.rounded())

        self.input.click_targets = targets
        self.renderer.present()
