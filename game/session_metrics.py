from __future__ import annotations

from typing import Sequence

from data.models import SessionSummary, TrialResult


def split_switch_stay(results: Sequence[TrialResult]) -> tuple[list[TrialResult], list[TrialResult]]:
    # первый trial не относится ни к switch, ни к stay
    switch = [r for r in results if r.is_switch]
    stay = [r for r in results if not r.is_switch and r.trial_index > 0]
    return switch, stay


def accuracy_pct(results: Sequence[TrialResult]) -> float:
    if not results:
        return 0.0
    return sum(1 for r in results if r.correct) / len(results) * 100


def mean_correct_rt(results: Sequence[TrialResult]) -> float:
    rts = [r.rt_ms for r in results if r.correct]
    if not rts:
        return 0.0
    return sum(rts) / len(rts)


def compute_summary(results: Sequence[TrialResult]) -> SessionSummary:
    switch, stay = split_switch_stay(results)

    switch_accuracy = accuracy_pct(switch)
    stay_accuracy = accuracy_pct(stay)
    switch_rt = mean_correct_rt(switch)
    stay_rt = mean_correct_rt(stay)

    return SessionSummary(
        total_trials=len(results),
        switch_trials=len(switch),
        stay_trials=len(stay),
        switch_accuracy=switch_accuracy,
        stay_accuracy=stay_accuracy,
        switch_rt=switch_rt,
        stay_rt=stay_rt,
        switch_cost_rt=switch_rt - stay_rt,
        switch_cost_acc=stay_accuracy - switch_accuracy,
        overall_accuracy=accuracy_pct(results),
    )
