from dataclasses import replace

import pytest

from config.settings import BlockParams, SessionConfig
from data.models import SessionSummary
from game.errors import SessionStateError
from game.rules import Answer, Rule, correct_answer
from game.session import Session
from game.state_machine import (
    PHASE_HOW,
    PHASE_PRACTICE_COMPLETE,
    PHASE_PRACTICE_INTRO,
    PHASE_RESULTS,
    PHASE_TESTING,
    PHASE_WELCOME,
    PHASE_WHAT,
)

FEEDBACK_MS = SessionConfig().feedback_ms


def walk_to_practice(session, now_ms=0):
    session.next_screen()
    session.next_screen()
    session.next_screen()
    session.start_practice_session(now_ms)


def answer_all(session, now_ms, rt_ms=0, correctly=True):
    """Отвечает на все trial-ы блока, возвращает время после последней паузы."""
    while session.phase == PHASE_TESTING:
        trial = session.current_trial()
        expected = correct_answer(trial.rule, trial.word)
        wrong = Answer.NO if expected is Answer.YES else Answer.YES
        now_ms += rt_ms
        session.submit_response(expected if correctly else wrong, now_ms)
        now_ms += FEEDBACK_MS
        assert session.update(now_ms) is True
    return now_ms


def walk_to_main(session, now_ms=0):
    walk_to_practice(session, now_ms)
    now_ms = answer_all(session, now_ms, rt_ms=400)
    session.start_main_session(now_ms)
    return now_ms


class TestPhases:
    def test_instruction_chain(self, session):
        assert session.phase == PHASE_WELCOME
        assert session.next_screen() == PHASE_WHAT
        assert session.next_screen() == PHASE_HOW
        assert session.next_screen() == PHASE_PRACTICE_INTRO

    def test_no_info_screen_after_practice_intro(self, session):
        for _ in range(3):
            session.next_screen()
        with pytest.raises(SessionStateError):
            session.next_screen()

    def test_main_needs_practice_first(self, session):
        with pytest.raises(SessionStateError):
            session.start_main_session(0)

    def test_practice_needs_intro(self, session):
        with pytest.raises(SessionStateError):
            session.start_practice_session(0)

    def test_reset_only_from_results(self, session):
        with pytest.raises(SessionStateError):
            session.reset()


class TestPractice:
    def test_practice_block(self, session):
        walk_to_practice(session)
        assert session.phase == PHASE_TESTING
        assert session.is_practice is True
        assert [t.rule for t in session.trials] == [Rule.LIVING, Rule.LIVING, Rule.LENGTH]

    def test_practice_ends_in_practice_complete(self, session):
        walk_to_practice(session)
        answer_all(session, 0, rt_ms=300)
        assert session.phase == PHASE_PRACTICE_COMPLETE
        assert len(session.results) == 3
        assert session.results[2].is_switch is True


class TestResponses:
    def test_response_time_from_trial_start(self, session):
        walk_to_practice(session, now_ms=1000)
        result = session.submit_response(Answer.YES, 1750)
        assert result.rt_ms == 750
        assert result.correct is True

    def test_feedback_while_pending(self, session):
        walk_to_practice(session)
        session.submit_response(Answer.NO, 100)
        assert session.feedback == "wrong"
        assert session.is_awaiting_response() is False

    def test_rejects_second_response_during_delay(self, session):
        walk_to_practice(session)
        session.submit_response(Answer.YES, 100)
        with pytest.raises(SessionStateError):
            session.submit_response(Answer.YES, 200)
        assert len(session.results) == 1

    def test_advance_waits_for_feedback_delay(self, session):
        walk_to_practice(session)
        session.submit_response(Answer.YES, 100)
        assert session.update(100 + FEEDBACK_MS - 1) is False
        assert session.current_index == 0
        assert session.update(100 + FEEDBACK_MS) is True
        assert session.current_index == 1
        assert session.trial_started_ms == 100 + FEEDBACK_MS
        assert session.feedback is None

    def test_update_without_pending_advance(self, session):
        walk_to_practice(session)
        assert session.update(10_000) is False

    def test_submit_outside_testing(self, session):
        with pytest.raises(SessionStateError):
            session.submit_response(Answer.YES, 0)


class TestMainSession:
    def test_thirty_trials(self, session):
        walk_to_main(session)
        assert session.is_practice is False
        assert len(session.trials) == 30
        assert session.results == []
        assert session.trials[0].is_switch is False

    def test_results_align_with_trials(self, session):
        now_ms = walk_to_main(session)
        answer_all(session, now_ms, rt_ms=350)
        assert session.phase == PHASE_RESULTS
        assert len(session.results) == len(session.trials)
        assert [r.trial_index for r in session.results] == list(range(30))
        assert [r.word for r in session.results] == [t.word for t in session.trials]
        assert session.results[0].is_switch is False

    def test_perfect_zero_rt_session(self, session):
        now_ms = walk_to_main(session)
        answer_all(session, now_ms, rt_ms=0)
        summary = session.compute_summary()
        assert summary.overall_accuracy == 100
        assert summary.switch_cost_rt == 0

    def test_all_wrong_session(self, session):
        now_ms = walk_to_main(session)
        answer_all(session, now_ms, rt_ms=200, correctly=False)
        stats = session.compute_summary().rounded()
        assert stats["overall_accuracy"] == 0
        assert stats["switch_rt"] == 0
        assert stats["stay_rt"] == 0

    def test_summary_idempotent(self, session):
        now_ms = walk_to_main(session)
        answer_all(session, now_ms, rt_ms=420)
        assert session.compute_summary() == session.compute_summary()

    def test_summary_without_answers_is_zero(self, session):
        walk_to_main(session)
        assert session.compute_summary() == SessionSummary()

    def test_progress(self, session):
        walk_to_main(session)
        assert session.progress == pytest.approx(1 / 30)

    def test_custom_block_length(self):
        session = Session(replace(SessionConfig(seed=1), block=replace(BlockParams(), n_trials=12)))
        walk_to_main(session)
        assert len(session.trials) == 12


class TestReset:
    def test_full_teardown(self, session):
        now_ms = walk_to_main(session)
        answer_all(session, now_ms, rt_ms=300)
        session.reset()
        assert session.phase == PHASE_WELCOME
        assert session.trials == []
        assert session.results == []
        assert session.current_index == 0
        assert session.trial_started_ms is None
        assert session.advance_at_ms is None

    def test_new_session_after_reset(self, session):
        now_ms = walk_to_main(session)
        now_ms = answer_all(session, now_ms, rt_ms=300)
        session.reset()
        walk_to_main(session, now_ms)
        assert len(session.trials) == 30
        assert session.results == []


class TestConfigValidation:
    def test_bad_block_fails_at_construction(self):
        with pytest.raises(ValueError):
            Session(replace(SessionConfig(), block=replace(BlockParams(), switch_rate=2.0)))

    def test_negative_feedback_delay(self):
        with pytest.raises(ValueError):
            Session(SessionConfig(feedback_ms=-1))
