class InvalidStimulusError(ValueError):
    """Правило или слово не входит в фиксированный набор."""


class SessionStateError(RuntimeError):
    """Операция не допустима в текущей фазе сессии."""
