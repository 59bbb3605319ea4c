"""Tests for the keypad input state machine."""

import logging

import pytest

from formula_evaluator import Operator
from keypad_session import KeypadSession, Phase


def test_initial_state(session):
    """A new session is empty."""
    assert session.display == ""
    assert session.phase is Phase.EMPTY
    assert session.typed_operand == ""
    assert session.accumulated_operand is None
    assert session.pending_operator is None
    assert session.just_evaluated is False


@pytest.mark.parametrize("sequence", ["7", "123", "0 0 7", "3.1415", "0.5", "100"])
def test_typed_operand_matches_display(press, session, sequence):
    """Typing digits keeps the display and the typed operand in step."""
    shown = press(sequence)
    assert float(shown) == float(session.typed_operand)


def test_leading_zero_is_replaced(press):
    assert press("0") == "0"
    assert press("0 5") == "5"


def test_decimal_point(press, session):
    assert press(".") == "0."
    assert press(".") == "0."
    assert press("4 . 2") == "0.42"


def test_decimal_point_inserted_once(press, session):
    press("4 .")
    assert session.typed_operand == "4."
    press(".")
    assert session.typed_operand == "4."
    assert press("2") == "4.2"


def test_decimal_after_operator(press):
    assert press("3 + .") == "3 + 0."


def test_toggle_sign(press, session):
    assert press("±") == "-"
    assert press("±") == ""
    assert press("5 ±") == "-5"
    assert session.typed_operand == "-5"


@pytest.mark.parametrize("sequence", ["", "5", "0.", "12.5", "3 + 4", "3 +"])
def test_toggle_sign_twice_is_identity(press, session, sequence):
    press(sequence)
    typed, shown = session.typed_operand, session.display
    press("± ±")
    assert session.typed_operand == typed
    assert session.display == shown


def test_toggle_sign_on_right_operand(press):
    assert press("3 + 4 ±") == "3 + -4"
    assert press("= ") == "-1"


def test_toggle_sign_after_equals_adopts_result(press, session):
    press("7 + 3 =")
    assert press("±") == "-10"
    assert session.typed_operand == "-10"
    assert session.accumulated_operand is None
    assert session.just_evaluated is False


def test_percent_of_typed_operand(press, session):
    assert press("50 %") == "0.5"
    assert session.typed_operand == "0.5"
    assert session.phase is Phase.TYPING_FIRST_OPERAND


def test_percent_without_operand_is_noop(press, session):
    assert press("%") == ""
    assert session.phase is Phase.EMPTY


def test_percent_of_right_operand(press):
    assert press("200 + 50 %") == "200 + 0.5"
    assert press("=") == "200.5"


def test_percent_of_accumulated_operand(press, session):
    assert press("50 + %") == "0.5 + "
    assert session.accumulated_operand == 0.5
    assert press("4 =") == "4.5"


def test_percent_after_equals(press, session):
    press("7 + 3 =")
    assert press("%") == "0.1"
    assert session.just_evaluated is False
    assert session.typed_operand == "0.1"


def test_operator_pressed_first(press, session):
    assert press("+") == ""
    assert session.pending_operator is Operator.ADD
    assert session.accumulated_operand is None
    assert press("5 × 2 =") == "10"


def test_bare_minus_sign_dropped_by_operator(press, session):
    assert press("± +") == ""
    assert session.typed_operand == ""


def test_first_operator_commits_operand(press, session):
    assert press("5 +") == "5 + "
    assert session.accumulated_operand == 5
    assert session.pending_operator is Operator.ADD
    assert session.typed_operand == ""
    assert session.phase is Phase.OPERATOR_PENDING


def test_operator_replaces_trailing_operator(press, session):
    assert press("5 + ×") == "5 × "
    assert session.pending_operator is Operator.MULTIPLY
    assert press("2 =") == "10"


def test_subtract_uses_minus_glyph(press, session):
    assert press("9 -") == "9 − "
    assert session.pending_operator is Operator.SUBTRACT
    assert press("4 =") == "5"


def test_left_to_right_chaining(press, session):
    assert press("3 + 4 ×") == "3 + 4 × "
    assert session.accumulated_operand == 7
    assert press("2 =") == "14"


def test_negative_result_continues(press):
    assert press("2 − 5 =") == "-3"
    assert press("× 2 =") == "-6"


def test_equals(press, session):
    assert press("7 + 3 =") == "10"
    assert session.accumulated_operand == 10
    assert session.typed_operand == ""
    assert session.pending_operator is None
    assert session.just_evaluated is True
    assert session.phase is Phase.EVALUATED


def test_chaining_after_equals(press):
    assert press("7 + 3 =") == "10"
    assert press("+") == "10 + "
    assert press("2 =") == "12"


def test_digit_after_equals_starts_fresh(press, session):
    press("7 + 3 =")
    assert press("4") == "4"
    assert session.accumulated_operand is None
    assert session.just_evaluated is False


def test_decimal_after_equals_starts_fresh(press):
    press("7 + 3 =")
    assert press(".") == "0."


def test_equals_ignores_trailing_operator(press):
    assert press("5 + =") == "5"


def test_equals_on_empty_is_noop(press, session):
    assert press("=") == ""
    assert session.phase is Phase.EMPTY


def test_divide_by_zero(press, session):
    assert press("5 ÷ 0 =") == "Cannot divide by 0"
    assert session.phase is Phase.ERROR_DISPLAYED
    assert session.typed_operand == ""
    assert session.accumulated_operand is None
    assert session.pending_operator is None
    assert session.just_evaluated is False
    assert press("8") == "8"


def test_divide_by_zero_while_chaining(press, session):
    assert press("5 ÷ 0 +") == "Cannot divide by 0"
    assert session.phase is Phase.ERROR_DISPLAYED


def test_keys_after_error(press, session):
    press("5 ÷ 0 =")
    assert press("=") == "Cannot divide by 0"
    assert press("%") == "Cannot divide by 0"
    assert press("+") == ""
    assert session.phase is Phase.EMPTY
    assert session.pending_operator is Operator.ADD


def test_overflow_is_an_error(press, session):
    big = "9" * 200
    assert press(f"{big} × {big} =") == "Error"
    assert session.phase is Phase.ERROR_DISPLAYED


def test_precision_rounding(press):
    assert press("0.1 + 0.2 =") == "0.3"


def test_clear_resets_everything(press, session):
    press("9 + 1 = + 4")
    assert press("C") == ""
    assert session.accumulated_operand is None
    assert session.pending_operator is None
    assert session.just_evaluated is False
    assert session.phase is Phase.EMPTY


def test_phases(session, press):
    assert session.phase is Phase.EMPTY
    press("3")
    assert session.phase is Phase.TYPING_FIRST_OPERAND
    press("+")
    assert session.phase is Phase.OPERATOR_PENDING
    press("4")
    assert session.phase is Phase.TYPING_SECOND_OPERAND
    press("=")
    assert session.phase is Phase.EVALUATED


def test_binary_percent_operator(press, session):
    press("200")
    session.set_operator(Operator.PERCENT)
    assert session.display == "200 % "
    press("5")
    assert press("=") == "10"


def test_sessions_are_independent(press, session):
    other = KeypadSession()
    press("4 + 4")
    assert other.display == ""
    assert other.accumulated_operand is None


def test_failure_is_logged(press, caplog):
    with caplog.at_level(logging.WARNING, logger="calculator"):
        press("5 ÷ 0 =")
    assert "DivideByZeroError" in caplog.text


def test_equals_with_bare_minus_is_noop(press, session):
    """A lone sign has nothing to evaluate once it is stripped."""
    assert press("± =") == "-"
    assert session.phase is Phase.TYPING_FIRST_OPERAND


def test_percent_replaces_bare_minus_sign(press, session):
    assert press("3 + ± %") == "0.03 + "
    assert session.typed_operand == ""
    assert session.accumulated_operand == pytest.approx(0.03)


def test_large_integer_result_hides_binary_noise(press):
    assert press("123456789 × 123456789 × 1000 =") == "15241578750190520000"
