import logging

import pytest

from wordle_solvrs.errors import (ConfigError, LengthMismatch, LoadError, NoCandidates,
                                  ParseError, SessionFinished, UnknownWord)
from wordle_solvrs.feedback import Mark, evaluate, feedback_to_string
from wordle_solvrs.filtering import is_consistent
from wordle_solvrs.session import (Session, SessionConfig, SessionState, parse_state,
                                   start_session)

from .conftest import SMALL_WORDS


def test_parse_state():
    records = parse_state("slateybbbb, pastsgbbbg", 5)
    assert [r.guess for r in records] == ["slate", "pasts"]
    assert records[0].feedback == (Mark.PRESENT,) + (Mark.ABSENT,) * 4
    assert feedback_to_string(records[1].feedback) == "gbbbg"
    assert str(records[0]) == "slateybbbb"


@pytest.mark.parametrize("text", [
    "", "slateybbb", "slat3ybbbb", "slateybbbx", "slateybbbb,", "slateybbbb,,pastsgbbbg",
])
def test_parse_state_rejects_malformed(text):
    with pytest.raises(ParseError):
        parse_state(text, 5)


def test_solved_on_first_turn_when_answer_is_first_guess(small_words):
    session = start_session(SessionConfig(first_guess="crane", answer="crane"), small_words)
    result = session.step()
    assert result.guess == "crane"
    assert result.state is SessionState.SOLVED
    assert session.state is SessionState.SOLVED
    assert len(session.history) == 1


def test_exhausted_with_one_guess(small_words):
    session = start_session(
        SessionConfig(max_guesses=1, first_guess="crane", answer="slate"), small_words)
    result = session.step()
    assert result.state is SessionState.EXHAUSTED
    assert session.remaining == 0
    with pytest.raises(SessionFinished):
        session.step()


def test_contradictory_state_fails_construction(default_words):
    with pytest.raises(NoCandidates):
        start_session(SessionConfig(state="cranegbbbb,slategbbbb"), default_words)


def test_preloaded_state(default_words):
    session = start_session(SessionConfig(state="slateybbbb"), default_words)
    assert session.state is SessionState.PLAYING
    assert len(session.history) == 1
    assert session.remaining == 5
    assert session.turn == 2
    assert all(w[0] != "s" and "s" in w for w in session.candidates)
    assert session.next_guess() in default_words


@pytest.mark.parametrize("answer", SMALL_WORDS)
def test_self_play_solves_every_word(small_words, answer):
    session = start_session(SessionConfig(first_guess="crane", answer=answer), small_words)
    results = session.run()
    assert session.state is SessionState.SOLVED
    assert results[-1].guess == answer
    assert len(results) <= 6
    for result in results[:-1]:
        assert result.state is SessionState.PLAYING


def test_candidates_stay_consistent(small_words):
    session = start_session(SessionConfig(first_guess="raise", answer="there"), small_words)
    previous = set(small_words)
    while not session.state.terminal:
        session.step()
        assert session.candidates <= previous
        assert "there" in session.candidates
        for word in session.candidates:
            assert is_consistent(word, session.history)
        previous = set(session.candidates)


def test_interactive_session(small_words):
    session = start_session(SessionConfig(first_guess="crane"), small_words)
    assert not session.test_mode
    assert session.next_guess() == "crane"

    result = session.step("bbgbg")
    assert result.state is SessionState.PLAYING
    assert session.candidates == {"slate"}

    assert session.next_guess() == "slate"
    result = session.step([Mark.HIT] * 5)
    assert result.state is SessionState.SOLVED


def test_interactive_malformed_feedback_aborts(small_words):
    session = start_session(SessionConfig(first_guess="crane"), small_words)
    with pytest.raises(ParseError):
        session.step("xyz")
    assert session.state is SessionState.ABORTED
    assert isinstance(session.error, ParseError)
    with pytest.raises(SessionFinished):
        session.step("bbbbb")


def test_interactive_contradictory_feedback_aborts(small_words):
    session = start_session(SessionConfig(first_guess="crane"), small_words)
    with pytest.raises(NoCandidates) as exc:
        session.step("ggggb")
    assert exc.value.guess == "crane"
    assert exc.value.feedback == "ggggb"
    assert session.state is SessionState.ABORTED
    assert session.error is exc.value


def test_feedback_mode_checks(small_words):
    test_session = start_session(SessionConfig(answer="slate"), small_words)
    with pytest.raises(ValueError):
        test_session.step("bbbbb")
    interactive = start_session(SessionConfig(), small_words)
    with pytest.raises(ValueError):
        interactive.step()
    with pytest.raises(ValueError):
        interactive.run()
    assert interactive.state is SessionState.PLAYING


def test_preloaded_terminal_states(default_words):
    solved = start_session(SessionConfig(state="slatebbgbg,craneggggg"), default_words)
    assert solved.state is SessionState.SOLVED
    assert solved.candidates == {"crane"}
    with pytest.raises(SessionFinished):
        solved.next_guess()

    exhausted = start_session(SessionConfig(max_guesses=1, state="slatebbbbb"), default_words)
    assert exhausted.state is SessionState.EXHAUSTED


def test_config_validation(small_words):
    with pytest.raises(ConfigError):
        start_session(SessionConfig(max_guesses=0), small_words)
    with pytest.raises(ConfigError):
        start_session(SessionConfig(strategy="random"), small_words)
    with pytest.raises(LengthMismatch):
        start_session(SessionConfig(answer="cranes"), small_words)
    with pytest.raises(UnknownWord):
        start_session(SessionConfig(answer="zzzzz"), small_words)
    with pytest.raises(UnknownWord):
        start_session(SessionConfig(first_guess="zzzzz"), small_words)
    with pytest.raises(LengthMismatch):
        start_session(SessionConfig(length=6), small_words)
    with pytest.raises(ConfigError):
        start_session(SessionConfig(max_guesses=1, state="slateybbbb,pastsgbbbg"), small_words)
    with pytest.raises(ParseError):
        start_session(SessionConfig(state="slate"), small_words)


def test_default_first_word_missing_from_list(small_words, caplog):
    with caplog.at_level(logging.WARNING):
        session = start_session(SessionConfig(), small_words)
    assert "reads" in caplog.text
    assert session.selector.first_guess is None
    assert session.next_guess() == session.selector.best_guess(small_words)


def test_default_first_word(default_words):
    session = start_session(SessionConfig(), default_words)
    assert session.next_guess() == "reads"
    scored = start_session(SessionConfig(score_first_guess=True), default_words)
    assert scored.selector.first_guess is None


def test_words_path(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(SMALL_WORDS))
    session = start_session(SessionConfig(words_path=str(path), first_guess="crane",
                                          answer="crane"))
    assert len(session.words) == len(SMALL_WORDS)
    session.run()
    assert session.state is SessionState.SOLVED

    with pytest.raises(LoadError):
        start_session(SessionConfig(words_path=str(tmp_path / "missing.txt")))


def test_plain_word_sequence():
    session = start_session(SessionConfig(first_guess="crane", answer="crate"), SMALL_WORDS)
    session.run()
    assert session.history[-1].guess == "crate"


def test_game_state_snapshot(small_words):
    session = Session(small_words, start_session(SessionConfig(first_guess="crane"),
                                                 small_words).selector)
    session.step(feedback_to_string(evaluate("crane", "react")))
    snapshot = session.game_state()
    assert snapshot.remaining == 5
    assert len(snapshot.history) == 1
    assert "react" in snapshot.candidates
