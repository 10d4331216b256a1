from game.errors import SessionStateError


# Фазу сессии храним как строку (это проще всего понимать и логировать)
PHASE_WELCOME = "WELCOME"                      # стартовый экран
PHASE_WHAT = "WHAT"                            # что измеряет тест
PHASE_HOW = "HOW"                              # как отвечать
PHASE_PRACTICE_INTRO = "PRACTICE_INTRO"        # перед тренировкой
PHASE_TESTING = "TESTING"                      # идут trial-ы (тренировка или тест)
PHASE_PRACTICE_COMPLETE = "PRACTICE_COMPLETE"  # тренировка закончилась
PHASE_RESULTS = "RESULTS"                      # итоги теста


# Куда можно перейти из каждой фазы.
# Из TESTING выходим только когда закончились trial-ы.
TRANSITIONS = {
    PHASE_WELCOME: {PHASE_WHAT},
    PHASE_WHAT: {PHASE_HOW},
    PHASE_HOW: {PHASE_PRACTICE_INTRO},
    PHASE_PRACTICE_INTRO: {PHASE_TESTING},
    PHASE_TESTING: {PHASE_PRACTICE_COMPLETE, PHASE_RESULTS},
    PHASE_PRACTICE_COMPLETE: {PHASE_TESTING},
    PHASE_RESULTS: {PHASE_WELCOME},
}

# Информационные экраны, которые просто листаются кнопкой "Next"
INFO_CHAIN = {
    PHASE_WELCOME: PHASE_WHAT,
    PHASE_WHAT: PHASE_HOW,
    PHASE_HOW: PHASE_PRACTICE_INTRO,
}


class PhaseMachine:
    """
    Маленький "мозг" для фаз сессии.

    Он ничего не знает про trial-ы, только проверяет, что переход разрешён.
    """

    def __init__(self) -> None:
        self.phase: str = PHASE_WELCOME

    def can_go(self, target: str) -> bool:
        return target in TRANSITIONS.get(self.phase, set())

    def go(self, target: str) -> str:
        if target not in TRANSITIONS:
            raise SessionStateError(f"Unknown phase: {target}")
        if not self.can_go(target):
            raise SessionStateError(f"Transition {self.phase} -> {target} is not allowed")
        self.phase = target
        return self.phase

    def reset(self) -> None:
        self.phase = PHASE_WELCOME
