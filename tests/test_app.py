from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from vocab_tutor.app import (
    SessionExitRequested, build_scheduler, cmd_learn, cmd_practice, cmd_today,
    run_review_session, session_int_prompt, session_prompt,
)
from vocab_tutor.db import init_db
from vocab_tutor.library import get_item, load_items, save_word
from vocab_tutor.prefs import set_daily_limit, set_proficiency_level
from vocab_tutor.widget import load_snapshot

YESTERDAY = datetime.now() - timedelta(days=2)


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("vocab_tutor.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("vocab_tutor.app.Prompt.ask", return_value="menu"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_returns_normal_input():
    with patch("vocab_tutor.app.Prompt.ask", return_value="hello"):
        assert session_prompt("test prompt") == "hello"


def test_session_prompt_accepts_exit_words_as_choices():
    with patch("vocab_tutor.app.Prompt.ask", return_value="r") as ask:
        session_prompt("remembered?", choices=["r", "f"])
    assert ask.call_args.kwargs["choices"] == ["r", "f", "q", "menu"]


def test_session_int_prompt_returns_int():
    with patch("vocab_tutor.app.Prompt.ask", return_value="4"):
        assert session_int_prompt("level", choices=["3", "4", "5", "6"]) == 4


def test_run_review_session_grades_each_item(tmp_db, catalog):
    init_db(tmp_db)
    save_word(tmp_db, catalog.get("城市"), now=YESTERDAY)
    save_word(tmp_db, catalog.get("帮助"), now=YESTERDAY)
    items = load_items(tmp_db)

    # Reveal, remembered; reveal, forgot
    with patch("vocab_tutor.app.Prompt.ask", side_effect=["", "r", "", "f"]):
        remembered, reviewed = run_review_session(tmp_db, items)

    assert (remembered, reviewed) == (1, 2)
    assert get_item(tmp_db, "城市").srs_stage == 1
    assert get_item(tmp_db, "帮助").srs_stage == 0
    assert get_item(tmp_db, "帮助").review_count == 1


def test_run_review_session_exits_on_q(tmp_db, catalog):
    init_db(tmp_db)
    save_word(tmp_db, catalog.get("城市"), now=YESTERDAY)
    save_word(tmp_db, catalog.get("帮助"), now=YESTERDAY)
    items = load_items(tmp_db)

    with patch("vocab_tutor.app.Prompt.ask", side_effect=["", "r", "q"]):
        with pytest.raises(SessionExitRequested):
            run_review_session(tmp_db, items)

    assert get_item(tmp_db, "城市").review_count == 1
    assert get_item(tmp_db, "帮助").review_count == 0


def test_run_review_session_empty():
    assert run_review_session("unused.db", []) == (0, 0)


def test_cmd_practice_reviews_due_words(tmp_db, catalog):
    init_db(tmp_db)
    save_word(tmp_db, catalog.get("城市"), now=YESTERDAY)
    save_word(tmp_db, catalog.get("帮助"), now=datetime.now() + timedelta(days=3))
    with patch("vocab_tutor.app.Prompt.ask", side_effect=["", "r"]):
        cmd_practice(tmp_db, catalog)
    assert get_item(tmp_db, "城市").review_count == 1
    assert get_item(tmp_db, "帮助").review_count == 0


def test_cmd_today_saves_word_and_snapshot(tmp_db, catalog):
    init_db(tmp_db)
    set_proficiency_level(tmp_db, 5)
    expected = build_scheduler(tmp_db, catalog).word_of_the_day()
    with patch("vocab_tutor.app.Prompt.ask", return_value="y"):
        cmd_today(tmp_db, catalog)
    assert load_snapshot(tmp_db).text == expected.text
    assert [i.word for i in load_items(tmp_db)] == [expected.text]


def test_cmd_today_shows_due_review_first(tmp_db, catalog):
    init_db(tmp_db)
    save_word(tmp_db, catalog.get("城市"), now=YESTERDAY)
    with patch("vocab_tutor.app.Prompt.ask") as ask:
        cmd_today(tmp_db, catalog)
    ask.assert_not_called()  # already saved, nothing to ask
    assert load_snapshot(tmp_db).text == "城市"


def test_cmd_learn_blocked_by_due_reviews(tmp_db, catalog):
    init_db(tmp_db)
    save_word(tmp_db, catalog.get("城市"), now=YESTERDAY)
    with patch("vocab_tutor.app.Prompt.ask") as ask:
        cmd_learn(tmp_db, catalog)
    ask.assert_not_called()
    assert len(load_items(tmp_db)) == 1


def test_cmd_learn_respects_daily_limit(tmp_db, catalog):
    init_db(tmp_db)
    set_daily_limit(tmp_db, 0)
    with patch("vocab_tutor.app.Prompt.ask") as ask:
        cmd_learn(tmp_db, catalog)
    ask.assert_not_called()


def test_cmd_learn_saves_up_to_limit(tmp_db, catalog):
    init_db(tmp_db)
    set_proficiency_level(tmp_db, 5)
    set_daily_limit(tmp_db, 2)
    with patch("vocab_tutor.app.Prompt.ask", return_value="s"):
        cmd_learn(tmp_db, catalog)
    saved = load_items(tmp_db)
    assert len(saved) == 2
    assert {i.proficiency_level for i in saved} == {5}
    assert len({i.word for i in saved}) == 2


def test_cmd_learn_stops_when_level_exhausted(tmp_db, catalog):
    init_db(tmp_db)
    set_proficiency_level(tmp_db, 3)
    set_daily_limit(tmp_db, 10)
    with patch("vocab_tutor.app.Prompt.ask", return_value="s"):
        cmd_learn(tmp_db, catalog)
    assert {i.word for i in load_items(tmp_db)} == {"城市", "帮助"}
