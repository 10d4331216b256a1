import pygame
import pytest

from game.input import ACTION_NEXT, ACTION_NO, ACTION_YES, InputManager


def key(k):
    return pygame.event.Event(pygame.KEYDOWN, key=k, unicode="")


class TestInputManager:
    @pytest.mark.parametrize(
        "k,action",
        [
            (pygame.K_f, ACTION_YES),
            (pygame.K_LEFT, ACTION_YES),
            (pygame.K_j, ACTION_NO),
            (pygame.K_RIGHT, ACTION_NO),
            (pygame.K_SPACE, ACTION_NEXT),
            (pygame.K_RETURN, ACTION_NEXT),
        ],
    )
    def test_key_mapping(self, k, action):
        manager = InputManager()
        manager.process_pygame_event(key(k))
        assert manager.poll_action() == action

    def test_poll_clears_action(self):
        manager = InputManager()
        manager.process_pygame_event(key(pygame.K_f))
        manager.poll_action()
        assert manager.poll_action() is None

    def test_last_key_wins(self):
        manager = InputManager()
        manager.process_pygame_event(key(pygame.K_f))
        manager.process_pygame_event(key(pygame.K_j))
        assert manager.poll_action() == ACTION_NO

    def test_ignores_other_keys(self):
        manager = InputManager()
        manager.process_pygame_event(key(pygame.K_q))
        assert manager.poll_action() is None

    def test_click_on_target(self):
        manager = InputManager()
        manager.click_targets = {ACTION_YES: pygame.Rect(10, 10, 100, 50)}
        manager.process_pygame_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(40, 30)))
        assert manager.poll_action() == ACTION_YES

    def test_click_outside_targets(self):
        manager = InputManager()
        manager.click_targets = {ACTION_YES: pygame.Rect(10, 10, 100, 50)}
        manager.process_pygame_event(pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=1, pos=(400, 300)))
        assert manager.poll_action() is None

    def test_reset(self):
        manager = InputManager()
        manager.process_pygame_event(key(pygame.K_SPACE))
        manager.reset()
        assert manager.poll_action() is None
