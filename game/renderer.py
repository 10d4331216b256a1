import pygame
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from data.models import Trial
from game.input import ACTION_NEXT, ACTION_NO, ACTION_YES


@dataclass(frozen=True)
class UiTheme:
    bg: Tuple[int, int, int] = (0, 0, 0)
    card: Tuple[int, int, int] = (9, 9, 11)
    panel: Tuple[int, int, int] = (24, 24, 27)
    border: Tuple[int, int, int] = (39, 39, 42)
    text: Tuple[int, int, int] = (255, 255, 255)
    muted: Tuple[int, int, int] = (161, 161, 170)
    dim: Tuple[int, int, int] = (113, 113, 122)
    accent: Tuple[int, int, int] = (57, 255, 106)
    warn: Tuple[int, int, int] = (250, 204, 21)
    alert: Tuple[int, int, int] = (248, 113, 113)


class Renderer:
    """
    Renderer отвечает ТОЛЬКО за рисование.
    Он не считает RT, не решает правильность, не управляет фазами.
    Ему дают данные — он их рисует и возвращает прямоугольники кнопок.
    """

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.w, self.h = screen.get_size()
        self.theme = UiTheme()

        # Шрифты (pygame.font должен быть инициализирован через pygame.init())
        self.font_huge = pygame.font.SysFont(None, 96, bold=True)
        self.font_big = pygame.font.SysFont(None, 56, bold=True)
        self.font_mid = pygame.font.SysFont(None, 36, bold=True)
        self.font_small = pygame.font.SysFont(None, 26)
        self.font_tiny = pygame.font.SysFont(None, 20)

        # Карточка по центру экрана, всё рисуем внутри неё
        card_w = min(560, self.w - 40)
        card_h = self.h - 40
        self.card = pygame.Rect((self.w - card_w) // 2, 20, card_w, card_h)
        self.pad = 24

    # -----------------------
    # Базовые методы экрана
    # -----------------------

    def clear(self) -> None:
        self.screen.fill(self.theme.bg)
        pygame.draw.rect(self.screen, self.theme.card, self.card, border_radius=16)
        pygame.draw.rect(self.screen, self.theme.border, self.card, width=1, border_radius=16)

    def present(self) -> None:
        pygame.display.flip()

    # -----------------------
    # Мелкие элементы
    # -----------------------

    def _wrap(self, text: str, font: pygame.font.Font, max_w: int) -> List[str]:
        words = text.split()
        lines = []
        line = ""
        for word in words:
            candidate = f"{line} {word}".strip()
            if font.size(candidate)[0] <= max_w:
                line = candidate
            else:
                if line:
                    lines.append(line)
                line = word
        if line:
            lines.append(line)
        return lines

    def draw_text(
        self,
        text: str,
        y: int,
        font: pygame.font.Font,
        color: Tuple[int, int, int],
        center: bool = False,
        rect: Optional[pygame.Rect] = None,
    ) -> int:
        """Рисует текст с переносом строк, возвращает y под последней строкой."""
        area = rect if rect is not None else self.card
        max_w = area.width - self.pad * 2
        for line in self._wrap(text, font, max_w):
            surf = font.render(line, True, color)
            if center:
                x = area.centerx - surf.get_width() // 2
            else:
                x = area.x + self.pad
            self.screen.blit(surf, (x, y))
            y += surf.get_height() + 4
        return y

    def draw_label(self, text: str, y: int) -> int:
        return self.draw_text(text.upper(), y, self.font_tiny, self.theme.dim) + 8

    def draw_box(self, rect: pygame.Rect, border: Optional[Tuple[int, int, int]] = None) -> None:
        pygame.draw.rect(self.screen, self.theme.panel, rect, border_radius=12)
        pygame.draw.rect(self.screen, border or self.theme.border, rect, width=1, border_radius=12)

    def draw_button(self, text: str, rect: pygame.Rect, primary: bool = False) -> pygame.Rect:
        color = self.theme.accent if primary else self.theme.text
        border = self.theme.accent if primary else (63, 63, 70)
        pygame.draw.rect(self.screen, border, rect, width=2, border_radius=12)
        surf = (self.font_mid if not primary else self.font_small).render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=rect.center))
        return rect

    def draw_primary_button(self, text: str) -> Dict[str, pygame.Rect]:
        rect = pygame.Rect(
            self.card.x + self.pad,
            self.card.bottom - self.pad - 52,
            self.card.width - self.pad * 2,
            52,
        )
        return {ACTION_NEXT: self.draw_button(text, rect, primary=True)}

    # -----------------------
    # Экраны
    # -----------------------

    def draw_welcome(self) -> Dict[str, pygame.Rect]:
        cx, cy = self.card.centerx, self.card.y + 120
        # логотип: два треугольника и кольцо
        pygame.draw.polygon(self.screen, self.theme.accent, [(cx - 20, cy), (cx - 5, cy - 15), (cx - 5, cy + 15)])
        pygame.draw.polygon(self.screen, self.theme.accent, [(cx + 20, cy), (cx + 5, cy - 15), (cx + 5, cy + 15)])
        pygame.draw.circle(self.screen, self.theme.accent, (cx, cy), 15, width=2)

        y = cy + 60
        y = self.draw_text("Category Switch", y, self.font_big, self.theme.text, center=True) + 12
        y = self.draw_text("Test your cognitive flexibility", y, self.font_small, self.theme.text, center=True)
        self.draw_text("~3 minutes", y + 4, self.font_tiny, self.theme.muted, center=True)
        return self.draw_primary_button("Next")

    def draw_what(self) -> Dict[str, pygame.Rect]:
        y = self.card.y + self.pad
        y = self.draw_label("What this measures", y)
        y = self.draw_text(
            "Cognitive flexibility, executive function, and processing speed",
            y, self.font_mid, self.theme.text,
        ) + 8
        y = self.draw_text(
            "This test measures how well you adapt when priorities shift unexpectedly. "
            "This skill impacts your daily life in important ways.",
            y, self.font_small, self.theme.muted,
        ) + 12

        items = [
            ("Managing Interruptions",
             "Switching between tasks at work, juggling multiple conversations, "
             "or adjusting plans when something unexpected happens."),
            ("Learning & Problem-Solving",
             "Trying new approaches when the first one doesn't work, adapting strategies "
             "in real-time, and learning from mistakes quickly."),
            ("Mental Health",
             "Better cognitive flexibility is linked to lower anxiety and depression, "
             "and greater resilience when facing life changes."),
        ]
        for title, body in items:
            box = pygame.Rect(self.card.x + self.pad, y, self.card.width - self.pad * 2, 84)
            self.draw_box(box)
            inner_y = self.draw_text(title, box.y + 10, self.font_tiny, self.theme.accent, rect=box)
            self.draw_text(body, inner_y, self.font_tiny, self.theme.muted, rect=box)
            y = box.bottom + 10
        return self.draw_primary_button("Next")

    def draw_how(self) -> Dict[str, pygame.Rect]:
        y = self.card.y + self.pad
        y = self.draw_label("How it works", y)
        y = self.draw_text("Answer based on the rule", y, self.font_mid, self.theme.text) + 12

        box = pygame.Rect(self.card.x + self.pad, y, self.card.width - self.pad * 2, 260)
        self.draw_box(box)
        inner_y = self.draw_text(
            "You will see a word and a rule. Your task is to answer YES or NO "
            "based on whether the word matches the rule.",
            box.y + 12, self.font_tiny, self.theme.text, rect=box,
        ) + 8
        for question, word, answer in (("Is it living?", "CAT", "YES"), ("More than 5 letters?", "DESK", "NO")):
            inner_y = self.draw_text(question, inner_y, self.font_tiny, self.theme.accent, center=True, rect=box)
            inner_y = self.draw_text(word, inner_y, self.font_mid, self.theme.text, center=True, rect=box)
            inner_y = self.draw_text(f"Answer: {answer}", inner_y, self.font_tiny, self.theme.dim, center=True, rect=box) + 8

        y = box.bottom + 16
        y = self.draw_text("The rule changes during the test", y, self.font_small, self.theme.warn, center=True)
        self.draw_text(
            "Answer as quickly and accurately as possible. The rule will switch multiple times "
            "throughout the test, so you need to adapt when it changes.",
            y + 4, self.font_tiny, self.theme.muted, center=True,
        )
        return self.draw_primary_button("Next")

    def draw_practice_intro(self) -> Dict[str, pygame.Rect]:
        y = self.card.y + self.pad
        y = self.draw_label("Before we begin", y)
        y = self.draw_text("Try 3 practice rounds", y, self.font_mid, self.theme.text) + 8
        self.draw_text(
            "Get familiar with the format. The rule will change once during practice.",
            y, self.font_small, self.theme.muted,
        )
        return self.draw_primary_button("Start Practice")

    def draw_practice_complete(self, n_trials: int) -> Dict[str, pygame.Rect]:
        y = self.card.y + self.pad
        y = self.draw_label("Practice complete", y)
        y = self.draw_text("Ready for the real test?", y, self.font_mid, self.theme.text) + 8
        self.draw_text(
            f"The test has {n_trials} trials. Remember: speed and accuracy both matter.",
            y, self.font_small, self.theme.muted,
        )
        return self.draw_primary_button("Start Test")

    def draw_trial(self, trial: Trial, progress: float, feedback: Optional[str]) -> Dict[str, pygame.Rect]:
        # прогресс-бар
        bar = pygame.Rect(self.card.x + self.pad, self.card.y + self.pad, self.card.width - self.pad * 2, 4)
        pygame.draw.rect(self.screen, self.theme.border, bar, border_radius=2)
        filled = bar.copy()
        filled.width = int(bar.width * progress)
        pygame.draw.rect(self.screen, self.theme.accent, filled, border_radius=2)

        y = bar.bottom + 32
        if trial.is_switch:
            y = self.draw_text("RULE CHANGE!", y, self.font_small, self.theme.warn, center=True)
        y = self.draw_text("CURRENT RULE", y, self.font_tiny, self.theme.dim, center=True) + 4
        y = self.draw_text(trial.rule.question, y, self.font_mid, self.theme.accent, center=True) + 40
        y = self.draw_text(trial.word, y, self.font_huge, self.theme.text, center=True) + 40

        if feedback is not None:
            # во время паузы кнопок нет, только фидбек
            if feedback == "correct":
                self.draw_text("Correct!", y, self.font_mid, self.theme.accent, center=True)
            else:
                self.draw_text("Incorrect", y, self.font_mid, self.theme.alert, center=True)
            return {}

        gap = 12
        btn_w = (self.card.width - self.pad * 2 - gap) // 2
        yes = pygame.Rect(self.card.x + self.pad, y, btn_w, 80)
        no = pygame.Rect(yes.right + gap, y, btn_w, 80)
        self.draw_button("YES", yes)
        self.draw_button("NO", no)
        self.draw_text("F / LEFT = YES    J / RIGHT = NO", no.bottom + 12, self.font_tiny, self.theme.dim, center=True)
        return {ACTION_YES: yes, ACTION_NO: no}

    def draw_results(self, stats: Dict[str, int]) -> Dict[str, pygame.Rect]:
        y = self.card.y + self.pad
        y = self.draw_label("Your Results", y)
        y = self.draw_text("Category Switch Performance", y, self.font_mid, self.theme.text) + 12

        box = pygame.Rect(self.card.x + self.pad, y, self.card.width - self.pad * 2, 120)
        self.draw_box(box)
        inner_y = self.draw_text(f"{stats['overall_accuracy']}%", box.y + 10, self.font_huge, self.theme.accent, center=True, rect=box)
        self.draw_text("Overall Accuracy", inner_y - 4, self.font_tiny, self.theme.dim, center=True, rect=box)
        y = box.bottom + 16

        y = self.draw_label("Switch Cost Analysis", y)
        gap = 12
        half_w = (self.card.width - self.pad * 2 - gap) // 2
        columns = (
            ("Switch trials", stats["switch_rt"], stats["switch_accuracy"]),
            ("Stay trials", stats["stay_rt"], stats["stay_accuracy"]),
        )
        for i, (title, rt, acc) in enumerate(columns):
            col = pygame.Rect(self.card.x + self.pad + i * (half_w + gap), y, half_w, 100)
            self.draw_box(col)
            inner_y = self.draw_text(title, col.y + 8, self.font_tiny, self.theme.dim, rect=col)
            inner_y = self.draw_text(f"{rt}ms", inner_y, self.font_big, self.theme.accent, rect=col)
            self.draw_text(f"{acc}% accurate", inner_y, self.font_tiny, self.theme.dim, rect=col)
        y += 112

        cost = pygame.Rect(self.card.x + self.pad, y, self.card.width - self.pad * 2, 70)
        self.draw_box(cost, border=(113, 63, 18))
        sign = "+" if stats["switch_cost_rt"] >= 0 else ""
        inner_y = self.draw_text(f"Switch Cost: {sign}{stats['switch_cost_rt']}ms", cost.y + 8, self.font_small, self.theme.warn, rect=cost)
        self.draw_text(
            f"You were {stats['switch_cost_rt']}ms slower when the rule changed. This measures cognitive flexibility.",
            inner_y, self.font_tiny, self.theme.muted, rect=cost,
        )
        y = cost.bottom + 16

        y = self.draw_label("Trial Breakdown", y)
        for line in (
            f"Total trials: {stats['total_trials']}",
            f"Switch trials: {stats['switch_trials']}",
            f"Stay trials: {stats['stay_trials']}",
        ):
            y = self.draw_text(line, y, self.font_tiny, self.theme.muted)
        return self.draw_primary_button("Start New Test")
