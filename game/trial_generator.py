import logging
import random
from typing import List, Sequence

from config.settings import BlockParams
from data.models import Trial
from game.rules import WORDS, Rule, resolve_rule

logger = logging.getLogger(__name__)


PRACTICE_WORDS = ("CAT", "TREE", "LAMP")
PRACTICE_RULES = (Rule.LIVING, Rule.LIVING, Rule.LENGTH)  # смена правила на 3-м trial-е


def build_trials(words: Sequence[str], rules: Sequence) -> List[Trial]:
    """
    Склеивает слова и правила по позиции в список Trial.

    is_switch считаем относительно предыдущего trial-а, первый trial никогда не switch.
    """
    if len(words) != len(rules):
        raise ValueError(f"words and rules differ in length: {len(words)} != {len(rules)}")

    trials: List[Trial] = []
    for i, (word, rule) in enumerate(zip(words, rules)):
        rule = resolve_rule(rule)
        is_switch = i > 0 and rule is not trials[i - 1].rule
        trials.append(Trial(trial_index=i, word=word, rule=rule, is_switch=is_switch))
    return trials


def generate_practice_block() -> List[Trial]:
    return build_trials(PRACTICE_WORDS, PRACTICE_RULES)


def draw_words(rng: random.Random, n: int, vocabulary: Sequence[str] = WORDS) -> List[str]:
    """
    Тянет n слов из словаря перемешиваниями без возвращения.

    Если n больше словаря, берём следующий проход по заново перемешанному словарю,
    так что повтор слова возможен только после того, как были показаны все слова.
    """
    if not vocabulary:
        raise ValueError("vocabulary is empty")

    words: List[str] = []
    while len(words) < n:
        deck = list(vocabulary)
        rng.shuffle(deck)
        # не начинаем новый проход с того же слова, которым закончился прошлый
        if words and len(deck) > 1 and deck[0] == words[-1]:
            deck[0], deck[-1] = deck[-1], deck[0]
        words.extend(deck[: n - len(words)])
    return words


def generate_rule_sequence(rng: random.Random, n: int, rules: Sequence, switch_rate: float) -> List[Rule]:
    candidates = [resolve_rule(r) for r in rules]
    if len(candidates) != 2 or candidates[0] is candidates[1]:
        raise ValueError(f"need two distinct rules, got {list(rules)}")

    # 1) первое правило выбираем случайно
    current = rng.choice(candidates)
    sequence = [current]

    # 2) дальше на каждом trial-е переключаемся с вероятностью switch_rate
    for _ in range(1, n):
        if rng.random() < switch_rate:
            current = candidates[1] if current is candidates[0] else candidates[0]
        sequence.append(current)
    return sequence


def validate_block_params(params: BlockParams) -> None:
    if params.n_trials < 1:
        raise ValueError(f"n_trials must be positive, got {params.n_trials}")
    if not 0.0 <= params.switch_rate <= 1.0:
        raise ValueError(f"switch_rate must be within [0, 1], got {params.switch_rate}")
    rules = [resolve_rule(r) for r in params.rules]
    if len(rules) != 2 or rules[0] is rules[1]:
        raise ValueError(f"need two distinct rules, got {list(params.rules)}")


def generate_main_block(params: BlockParams, rng: random.Random) -> List[Trial]:
    validate_block_params(params)

    if params.n_trials > len(WORDS):
        logger.debug(
            "Block of %d trials is longer than the %d-word vocabulary, words will repeat",
            params.n_trials,
            len(WORDS),
        )

    words = draw_words(rng, params.n_trials)
    rules = generate_rule_sequence(rng, params.n_trials, params.rules, params.switch_rate)
    trials = build_trials(words, rules)

    logger.info(
        "Generated main block: %d trials, %d switches",
        len(trials),
        sum(1 for t in trials if t.is_switch),
    )
    return trials
