from enum import Enum

from game.errors import InvalidStimulusError


WORDS = (
    "CAT", "CHAIR", "DOG", "TABLE", "TREE", "PHONE", "BIRD", "LAMP",
    "FISH", "DOOR", "LION", "WINDOW", "BEAR", "CLOCK", "ROSE", "KEYBOARD",
    "FERN", "SCREEN", "WOLF", "MOUSE", "DESK", "RABBIT", "PLANT", "BOOK",
)

LIVING_WORDS = frozenset(
    ["CAT", "DOG", "TREE", "BIRD", "FISH", "LION", "BEAR", "ROSE", "FERN", "WOLF"]
)

MIN_LONG_WORD = 6  # "больше 5 букв"

_VOCABULARY = frozenset(WORDS)


class Answer(str, Enum):
    YES = "Yes"
    NO = "No"


class Rule(str, Enum):
    LIVING = "living"
    LENGTH = "length"

    @property
    def question(self) -> str:
        if self is Rule.LIVING:
            return "Is it LIVING?"
        return "More than 5 letters?"

    def check(self, word: str) -> bool:
        if self is Rule.LIVING:
            return word in LIVING_WORDS
        return len(word) >= MIN_LONG_WORD


def resolve_rule(rule) -> Rule:
    try:
        return Rule(rule)
    except ValueError:
        raise InvalidStimulusError(f"Unknown rule: {rule!r}") from None


def resolve_answer(answer) -> Answer:
    try:
        return Answer(answer)
    except ValueError:
        raise InvalidStimulusError(f"Unknown answer: {answer!r}") from None


def evaluate(rule, word: str) -> bool:
    rule = resolve_rule(rule)
    if word not in _VOCABULARY:
        raise InvalidStimulusError(f"Unknown word: {word!r}")
    return rule.check(word)


def correct_answer(rule, word: str) -> Answer:
    return Answer.YES if evaluate(rule, word) else Answer.NO


def other_rule(rule) -> Rule:
    return Rule.LENGTH if resolve_rule(rule) is Rule.LIVING else Rule.LIVING
