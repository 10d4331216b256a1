import pygame
from typing import Dict, Optional


ACTION_YES = "YES"
ACTION_NO = "NO"
ACTION_NEXT = "NEXT"


class InputManager:
    """
    InputManager — это прослойка между pygame и нашей логикой.

    Идея:
    - pygame шлёт события (event)
    - мы смотрим на KEYDOWN и на клики мышью по кнопкам
    - если нажата нужная клавиша/кнопка -> запоминаем действие ("YES"/"NO"/"NEXT")
    - Scene в каждом кадре спрашивает poll_action()
    """

    def __init__(self):
        # Последнее нажатие, которое ещё не было забрано через poll_action()
        self._last_action: Optional[str] = None

        # Mapping клавиш pygame -> наши действия
        self.key_to_action = {
            pygame.K_f: ACTION_YES,
            pygame.K_LEFT: ACTION_YES,
            pygame.K_j: ACTION_NO,
            pygame.K_RIGHT: ACTION_NO,
            pygame.K_SPACE: ACTION_NEXT,
            pygame.K_RETURN: ACTION_NEXT,
        }

        # Кнопки на экране: действие -> прямоугольник. Renderer обновляет их каждый кадр.
        self.click_targets: Dict[str, pygame.Rect] = {}

    def process_pygame_event(self, event) -> None:
        if event.type == pygame.KEYDOWN:
            if event.key in self.key_to_action:
                # если нажали несколько раз за кадр, сохраняем только последнее
                self._last_action = self.key_to_action[event.key]
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            for action, rect in self.click_targets.items():
                if rect.collidepoint(event.pos):
                    self._last_action = action
                    return

    def poll_action(self) -> Optional[str]:
        """
        Возвращает действие, если оно было, и сразу очищает его,
        чтобы оно не "залипало" на следующем кадре.
        """
        action = self._last_action
        self._last_action = None
        return action

    def reset(self) -> None:
        """Сбрасывает ввод при смене экрана или trial-а."""
        self._last_action = None
