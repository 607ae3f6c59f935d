"""Tests for the calculator state machine."""

import pytest

from kalkulator_dasar.engine import CalculatorEngine
from kalkulator_dasar.types import CalculatorState, Operation, ValidationError


def press(engine, keys):
    """Feed a compact key string: digits, '.', operators, '=', 'C', '<', '~', '%'."""
    for key in keys:
        if key.isdigit():
            engine.input_digit(key)
        elif key == ".":
            engine.input_decimal()
        elif key in "+-*/":
            engine.set_operation(key)
        elif key == "=":
            engine.equals()
        elif key == "C":
            engine.clear()
        elif key == "<":
            engine.backspace()
        elif key == "~":
            engine.toggle_sign()
        elif key == "%":
            engine.percentage()
        else:
            raise AssertionError(f"unknown test key {key!r}")
    return engine


@pytest.fixture
def engine():
    return CalculatorEngine()


def assert_error_configuration(engine):
    assert engine.error is True
    assert engine.display_text == "Error"
    assert engine.state.previous_value is None
    assert engine.state.operation is None
    assert engine.pending_expression_text == ""


class TestInitialState:
    def test_starts_cleared(self, engine):
        assert engine.state == CalculatorState()
        assert engine.display_text == "0"
        assert engine.pending_expression_text == ""
        assert engine.error is False


class TestDigitEntry:
    @pytest.mark.parametrize(
        "keys, expected",
        [
            ("7", "7"),
            ("123", "123"),
            ("007", "7"),
            ("000", "0"),
            ("1000", "1000"),
            ("9876543210", "9876543210"),
        ],
    )
    def test_digits_reproduce_sequence(self, engine, keys, expected):
        press(engine, keys)
        assert engine.display_text == expected

    def test_length_cap_ignores_extra_digits(self, engine):
        press(engine, "123456789012345")
        assert engine.display_text == "123456789012"

    def test_custom_length_cap(self):
        engine = press(CalculatorEngine(max_length=3), "12345")
        assert engine.display_text == "123"

    def test_digit_after_operator_starts_new_number(self, engine):
        press(engine, "12+3")
        assert engine.display_text == "3"
        assert engine.pending_expression_text == "12 +"

    def test_digit_after_equals_replaces_result(self, engine):
        press(engine, "2+3=7")
        assert engine.display_text == "7"
        assert engine.pending_expression_text == ""

    @pytest.mark.parametrize("bad", ["a", "12", "", 5, None])
    def test_invalid_digit_raises(self, engine, bad):
        with pytest.raises(ValidationError) as exc_info:
            engine.input_digit(bad)
        assert exc_info.value.code == "INVALID_DIGIT"
        assert engine.state == CalculatorState()


class TestDecimal:
    def test_decimal_is_idempotent(self, engine):
        press(engine, "1.")
        once = engine.display_text
        press(engine, ".")
        assert engine.display_text == once == "1."

    def test_decimal_then_digits(self, engine):
        press(engine, "1.5")
        assert engine.display_text == "1.5"

    def test_decimal_on_zero(self, engine):
        press(engine, ".05")
        assert engine.display_text == "0.05"

    def test_decimal_after_operator(self, engine):
        press(engine, "5+.2")
        assert engine.display_text == "0.2"
        press(engine, "=")
        assert engine.display_text == "5.2"

    def test_only_one_decimal_point(self, engine):
        press(engine, "1.2.3")
        assert engine.display_text == "1.23"


class TestBackspace:
    def test_single_character_returns_to_zero(self, engine):
        press(engine, "7<")
        assert engine.display_text == "0"

    def test_backspace_on_zero(self, engine):
        press(engine, "<")
        assert engine.display_text == "0"

    def test_drops_last_character(self, engine):
        press(engine, "123<")
        assert engine.display_text == "12"

    def test_drops_decimal_point(self, engine):
        press(engine, "4.<")
        assert engine.display_text == "4"
        press(engine, ".5")
        assert engine.display_text == "4.5"

    def test_lone_sign_fails_to_parse_on_operator(self, engine):
        press(engine, "7~<")
        assert engine.display_text == "-"
        press(engine, "+")
        assert_error_configuration(engine)

    def test_backspace_clears_error(self, engine):
        press(engine, "5/0=<")
        assert engine.state == CalculatorState()


class TestOperations:
    def test_addition(self, engine):
        press(engine, "2+3=")
        assert engine.display_text == "5"

    @pytest.mark.parametrize(
        "keys, expected",
        [
            ("9-4=", "5"),
            ("4-9=", "-5"),
            ("6*7=", "42"),
            ("8/2=", "4"),
            ("7/2=", "3.5"),
            ("1/3=", "0.33333333"),
            ("2/3=", "0.66666667"),
            (".1+.2=", "0.3"),
            ("1.1*3=", "3.3"),
        ],
    )
    def test_binary_operations(self, engine, keys, expected):
        press(engine, keys)
        assert engine.display_text == expected

    def test_pending_expression_text(self, engine):
        press(engine, "6*")
        assert engine.pending_expression_text == "6 ×"
        press(engine, "C8/")
        assert engine.pending_expression_text == "8 ÷"
        press(engine, "C1.5-")
        assert engine.pending_expression_text == "1.5 -"

    def test_operator_records_state(self, engine):
        press(engine, "12+")
        assert engine.state.previous_value == 12
        assert engine.state.operation is Operation.ADD
        assert engine.state.start_new_number is True
        assert engine.display_text == "12"

    def test_operator_accepts_display_symbols(self, engine):
        press(engine, "6")
        engine.set_operation("×")
        press(engine, "7=")
        assert engine.display_text == "42"

    def test_operator_accepts_enum(self, engine):
        press(engine, "8")
        engine.set_operation(Operation.DIVIDE)
        press(engine, "4=")
        assert engine.display_text == "2"

    def test_unknown_operator_raises(self, engine):
        with pytest.raises(ValidationError) as exc_info:
            engine.set_operation("^")
        assert exc_info.value.code == "UNKNOWN_OPERATOR"

    def test_changing_operator_without_operand_chains(self, engine):
        # The displayed value doubles as the second operand
        press(engine, "2+*")
        assert engine.display_text == "4"
        assert engine.pending_expression_text == "4 ×"

    def test_equals_without_pending_operation_is_noop(self, engine):
        press(engine, "42=")
        assert engine.display_text == "42"
        assert engine.state.start_new_number is False

    def test_result_can_be_continued(self, engine):
        press(engine, "2+3=*2=")
        assert engine.display_text == "10"

    def test_custom_decimal_places(self):
        engine = press(CalculatorEngine(decimal_places=2), "1/3=")
        assert engine.display_text == "0.33"


class TestChaining:
    def test_running_total(self, engine):
        press(engine, "2+3+")
        assert engine.display_text == "5"
        assert engine.pending_expression_text == "5 +"
        press(engine, "4=")
        assert engine.display_text == "9"

    def test_mixed_chain_is_left_to_right(self, engine):
        press(engine, "2+3*4=")
        assert engine.display_text == "20"

    def test_rounded_value_is_retained(self, engine):
        press(engine, "1/3*")
        assert engine.state.previous_value == 0.33333333
        press(engine, "3=")
        assert engine.display_text == "0.99999999"

    def test_chain_division_by_zero(self, engine):
        press(engine, "5/0+")
        assert_error_configuration(engine)


class TestErrors:
    def test_division_by_zero(self, engine):
        press(engine, "5/0=")
        assert_error_configuration(engine)

    def test_overflow_is_error(self, engine):
        engine.state.display = "1e308"
        press(engine, "*10=")
        assert_error_configuration(engine)

    def test_custom_error_marker(self):
        engine = press(CalculatorEngine(error_marker="E"), "1/0=")
        assert engine.display_text == "E"

    def test_digit_after_error_starts_fresh(self, engine):
        press(engine, "5/0=3")
        assert engine.error is False
        assert engine.display_text == "3"

    def test_decimal_after_error_starts_fresh(self, engine):
        press(engine, "5/0=.")
        assert engine.display_text == "0."

    def test_operator_after_error_is_swallowed(self, engine):
        press(engine, "5/0=+")
        assert engine.state == CalculatorState()
        press(engine, "4=")
        assert engine.display_text == "4"

    @pytest.mark.parametrize("key", ["=", "~", "%", "C"])
    def test_other_actions_clear_error(self, engine, key):
        press(engine, "5/0=" + key)
        assert engine.state == CalculatorState()


class TestSmallNumbers:
    def test_small_result_is_plain_decimal(self, engine):
        press(engine, "1/100000=")
        assert engine.display_text == "0.00001"

    def test_typing_continues_after_percentage(self, engine):
        press(engine, "0.001%")
        assert engine.display_text == "0.00001"
        press(engine, "5")
        assert engine.display_text == "0.000015"

    def test_decimal_after_percentage_keeps_calculation(self, engine):
        press(engine, "1+0.001%.=")
        assert engine.error is False
        assert engine.display_text == "1.00001"

    def test_backspaced_exponent_reads_leading_number(self, engine):
        engine.state.display = "1e-10"
        press(engine, "<<")
        assert engine.display_text == "1e-"
        press(engine, "+2=")
        assert engine.error is False
        assert engine.display_text == "3"

    def test_decimal_after_exponent_reads_leading_number(self, engine):
        engine.state.display = "1e-8"
        press(engine, ".")
        assert engine.display_text == "1e-8."
        press(engine, "+")
        assert engine.error is False
        assert engine.state.previous_value == 1e-8
        assert engine.pending_expression_text == "1e-8 +"


class TestSignAndPercent:
    def test_toggle_sign_round_trip(self, engine):
        press(engine, "7~")
        assert engine.display_text == "-7"
        press(engine, "~")
        assert engine.display_text == "7"

    def test_toggle_sign_on_zero(self, engine):
        press(engine, "~")
        assert engine.display_text == "0"

    def test_toggle_sign_on_fraction(self, engine):
        press(engine, "2.5~")
        assert engine.display_text == "-2.5"

    def test_percentage(self, engine):
        press(engine, "50%")
        assert engine.display_text == "0.5"

    def test_percentage_of_pending_operand(self, engine):
        press(engine, "5+5%=")
        assert engine.display_text == "5.05"

    def test_unparsable_display_is_left_unchanged(self, engine):
        press(engine, "7~<")
        press(engine, "~")
        assert engine.display_text == "-"
        assert engine.error is False


class TestClear:
    def test_clear_resets_everything(self, engine):
        press(engine, "12+3")
        press(engine, "C")
        assert engine.state == CalculatorState()

    def test_snapshot_is_independent(self, engine):
        press(engine, "12")
        snap = engine.snapshot()
        press(engine, "3")
        assert snap.display == "12"
        assert engine.display_text == "123"


class TestListeners:
    def test_listener_called_after_each_action(self, engine):
        seen = []
        engine.subscribe(lambda e: seen.append(e.display_text))
        press(engine, "12+3=")
        assert seen == ["1", "12", "12", "3", "15"]

    def test_no_intermediate_state_after_error(self, engine):
        press(engine, "5/0=")
        seen = []
        engine.subscribe(lambda e: seen.append((e.display_text, e.error)))
        press(engine, "3")
        assert seen == [("3", False)]

    def test_unsubscribe(self, engine):
        seen = []
        listener = seen.append
        engine.subscribe(listener)
        press(engine, "1")
        engine.unsubscribe(listener)
        press(engine, "2")
        assert seen == [engine]
