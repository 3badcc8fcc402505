"""Tests for the Streamlit generator page."""

from streamlit.testing.v1 import AppTest


def _page():
    from ui.generator_page import render

    render()


def _app():
    return AppTest.from_function(_page, default_timeout=30).run()


def test_generate_records_history():
    at = _app()
    assert not at.exception

    at.button(key="generate").click().run()

    assert not at.exception
    assert not at.error
    assert len(at.session_state["history"]) == 1
    assert at.success or at.warning


def test_generate_without_classes_shows_error():
    at = _app()
    for key in ("use_lower", "use_upper", "use_digits", "use_symbols"):
        at.checkbox(key=key).uncheck()
    at.button(key="generate").click().run()

    assert "Select at least one character set." in [e.value for e in at.error]
    assert len(at.session_state["history"]) == 0


def test_history_keeps_last_seven():
    at = _app()
    at.number_input(key="quantity").set_value(10)
    at.button(key="generate").click().run()

    assert len(at.session_state["history"]) == 7


def test_clear_history():
    at = _app()
    at.button(key="generate").click().run()
    at.button(key="clear_history").click().run()

    assert len(at.session_state["history"]) == 0
