from data.models import Trial, TrialResult
from game.rules import correct_answer, resolve_answer


def score_response(trial: Trial, user_answer, rt_ms: int) -> TrialResult:
    """
    Оценивает ответ на один trial.

    Правильный ответ всегда пересчитывается из (слово, правило), а не берётся из trial-а.
    Лимита времени нет: rt_ms может быть сколь угодно большим.
    """
    if rt_ms < 0:
        raise ValueError(f"rt_ms must not be negative, got {rt_ms}")

    answer = resolve_answer(user_answer)
    expected = correct_answer(trial.rule, trial.word)
    return TrialResult(
        trial_index=trial.trial_index,
        word=trial.word,
        rule=trial.rule,
        correct_answer=expected,
        user_answer=answer,
        correct=answer is expected,
        rt_ms=int(rt_ms),
        is_switch=trial.is_switch,
    )
