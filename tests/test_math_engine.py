import sys
from fractions import Fraction

import pytest

from rational_calc import MathEngine
from rational_calc import error as E
from rational_calc.MathEngine import calculate, cleanup, compute, evaluate, power
from rational_calc.Parser import parse


# -----------------------------
# Exact arithmetic
# -----------------------------

@pytest.mark.parametrize("a, b", [
    (1, 3), (2, 4), (10, 5), (-7, 21), (0, 9), (123456789, 1000), (6, -8),
])
def test_integer_division_is_exact_and_reduced(a, b):
    result = evaluate(f"{a} / {b}")
    assert result == Fraction(a, b)
    assert (result.numerator, result.denominator) == (Fraction(a, b).numerator, Fraction(a, b).denominator)


@pytest.mark.parametrize("source, expected", [
    ("2 - 3 - 4", -5),
    ("2 ^ 3 ^ 2", 512),
    ("2 + 3 * 4", 14),
    ("(2 + 3) * 4", 20),
    ("2 * 3 + 4", 10),
    ("8 / 4 / 2", 1),
    ("2 ^ 3 * 4", 32),
    ("1 + 2 ^ 2 * 3", 13),
    ("((7))", 7),
])
def test_precedence_and_associativity(source, expected):
    assert evaluate(source) == expected


@pytest.mark.parametrize("source, expected", [
    ("-(2 + 3)", -5),
    ("-2 ^ 2", 4),
    ("-(2 ^ 2)", -4),
    ("-(2 * 3)", -6),
    ("-(6 / 2)", -3),
    ("-(2 * 3 + 4)", -10),
    ("-(1 - 2 * 3 ^ 2)", 17),
    ("-(2 ^ 3 + 1)", -9),
    ("--3", 3),
    ("-+-3", 3),
    ("2 - -3", 5),
    ("+(1 - 4)", -3),
])
def test_unary_sign(source, expected):
    assert evaluate(source) == expected


def test_integer_powers_are_exact():
    assert evaluate("2 ^ -1") == Fraction(1, 2)
    assert evaluate("(1 / 2) ^ -2") == 4
    assert evaluate("(2 / 3) ^ 3") == Fraction(8, 27)
    assert evaluate("0 ^ 0") == 1
    assert evaluate("2 ^ 100") == 2 ** 100


def test_exponent_that_evaluates_to_an_integer_stays_exact():
    assert evaluate("3 ^ (1 / 2 + 1 / 2)") == 3
    assert evaluate("(1 / 3) ^ 2.0") == Fraction(1, 9)


def test_literals_are_binary_floats():
    assert evaluate("0.1") == Fraction(0.1)
    assert evaluate("0.1 + 0.2") == Fraction(0.1) + Fraction(0.2)
    assert evaluate("0.1 + 0.2") != Fraction(3, 10)
    assert evaluate("0.5 + 0.25") == Fraction(3, 4)


# -----------------------------
# Non-integer exponents (float fallback)
# -----------------------------

def test_fractional_exponent_uses_float_fallback():
    assert evaluate("4 ^ 0.5") == 2
    assert evaluate("2 ^ 0.5") == Fraction(2 ** 0.5)
    assert evaluate("(1 / 3) ^ 1.5") == Fraction(float(Fraction(1, 3)) ** 1.5)


def test_fractional_exponent_result_is_not_exact():
    result = evaluate("2 ^ 0.5")
    assert result * result != 2


def test_negative_base_with_fractional_exponent():
    with pytest.raises(E.NonRealResultError) as excinfo:
        evaluate("-8 ^ 0.5")
    assert excinfo.value.code == "3031"


def test_zero_base_with_negative_fractional_exponent():
    with pytest.raises(E.DivisionByZeroError):
        evaluate("0 ^ -0.5")


def test_zero_base_with_positive_fractional_exponent():
    assert evaluate("0 ^ 0.5") == 0


@pytest.mark.parametrize("source", ["10 ^ 400.5", "(10 ^ 400) ^ 0.5"])
def test_fractional_exponent_overflow(source):
    with pytest.raises(E.NumberTooBigError) as excinfo:
        evaluate(source)
    assert excinfo.value.code == "3026"


def test_power_helper_directly():
    assert power(Fraction(9), Fraction(-2)) == Fraction(1, 81)
    with pytest.raises(E.DivisionByZeroError):
        power(Fraction(0), Fraction(-3))


# -----------------------------
# Errors
# -----------------------------

@pytest.mark.parametrize("source", ["1 / 0", "1 / (2 - 2)", "5 / 0.0", "0 ^ -1", "1 + 2 / (1 - 1) * 3"])
def test_division_by_zero(source):
    with pytest.raises(E.DivisionByZeroError) as excinfo:
        evaluate(source)
    assert isinstance(excinfo.value, E.CalculationError)
    assert excinfo.value.code == "3003"


def test_errors_carry_the_input_line():
    with pytest.raises(E.MathError) as excinfo:
        evaluate("1 / 0")
    assert excinfo.value.equation == "1 / 0"

    with pytest.raises(E.TrailingInputError) as excinfo:
        evaluate("2 + 2 3")
    assert excinfo.value.equation == "2 + 2 3"
    assert excinfo.value.text == "3"


def test_invalid_literal_through_evaluate():
    with pytest.raises(E.InvalidNumberLiteralError) as excinfo:
        evaluate("1.2.3")
    assert excinfo.value.text == "1.2.3"


def test_deep_nesting_is_reported_as_an_error():
    source = "(" * 5000 + "1" + ")" * 5000
    with pytest.raises(E.ParseError) as excinfo:
        evaluate(source)
    assert excinfo.value.code == "3032"


# -----------------------------
# Independence of evaluations
# -----------------------------

def test_same_line_twice_gives_the_same_result():
    line = "(1 / 3 + 2 ^ -2) * -(7 - 0.5)"
    assert evaluate(line) == evaluate(line)


def test_failed_evaluation_leaves_no_state_behind():
    with pytest.raises(E.DivisionByZeroError):
        evaluate("1 / 0")
    assert evaluate("1 / 4") == Fraction(1, 4)


def test_compute_on_parsed_tree():
    assert compute(parse("2 * (3 + 4)")) == 14


def test_debug_prints_tokens_and_tree(monkeypatch, capsys):
    monkeypatch.setattr(MathEngine, "debug", True)
    evaluate("1 + 2")
    out = capsys.readouterr().out
    assert "Token(" in out
    assert "Final tree:" in out
    assert "Expression(Number(1), [(+, Expression(Number(2)))])" in out


# -----------------------------
# Formatting
# -----------------------------

@pytest.mark.parametrize("value, places, expected", [
    (Fraction(14), 24, ("14", False)),
    (Fraction(-5), 24, ("-5", False)),
    (Fraction(1, 2), 24, ("0.5", False)),
    (Fraction(2, 3), 24, ("0." + "6" * 23 + "7", True)),
    (Fraction(-1, 3), 2, ("-0.33", True)),
    (Fraction(-1, 1000), 2, ("0", True)),
    (Fraction(1, 8), 2, ("0.12", True)),
    (Fraction(3, 8), 2, ("0.38", True)),
    (Fraction(7, 2), 0, ("4", True)),
    (Fraction(201, 100), 5, ("2.01", False)),
])
def test_cleanup_decimal(value, places, expected):
    assert cleanup(value, decimal_places=places) == expected


@pytest.mark.parametrize("value, expected", [
    (Fraction(1, 3), "1/3"),
    (Fraction(-1, 3), "-1/3"),
    (Fraction(7, 2), "3 1/2"),
    (Fraction(-3, 2), "-1 1/2"),
    (Fraction(6), "6"),
])
def test_cleanup_fractions(value, expected):
    assert cleanup(value, fractions=True) == (expected, False)


def test_calculate_with_explicit_settings():
    assert calculate("2 + 3 * 4", {"decimal_places": 24}) == "= 14"
    assert calculate("2 / 3", {"decimal_places": 3}) == "≈ 0.667"
    assert calculate("7 / 2", {"fractions": True}) == "= 3 1/2"


def test_calculate_reads_config(write_config):
    write_config({"decimal_places": 2})
    assert calculate("1 / 3") == "≈ 0.33"


def test_calculate_propagates_errors():
    with pytest.raises(E.DivisionByZeroError):
        calculate("1 / 0", {})


# -----------------------------
# Size limits
# -----------------------------

@pytest.mark.parametrize("source", ["9 ^ 9 ^ 9", "2 ^ 10000000000", "(1 / 3) ^ -10000000000"])
def test_huge_integer_power_is_refused(source):
    with pytest.raises(E.NumberTooBigError) as excinfo:
        evaluate(source)
    assert excinfo.value.code == "3026"
    assert excinfo.value.equation == source


@pytest.mark.parametrize("source, expected", [
    ("1 ^ 10000000000", 1),
    ("-1 ^ 10000000001", -1),
    ("0 ^ 10000000000", 0),
])
def test_trivial_bases_ignore_the_size_limit(source, expected):
    assert evaluate(source) == expected


def test_power_just_inside_the_limit(monkeypatch):
    monkeypatch.setattr(MathEngine, "MAX_POWER_BITS", 100)
    assert power(Fraction(2), Fraction(50)) == 2 ** 50
    with pytest.raises(E.NumberTooBigError):
        power(Fraction(2), Fraction(60))


@pytest.mark.skipif(not hasattr(sys, "set_int_max_str_digits"),
                    reason="no int to str digit limit before Python 3.11")
def test_cleanup_of_unprintable_integer():
    old_limit = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(5000)
    try:
        with pytest.raises(E.NumberTooBigError):
            cleanup(Fraction(10) ** 6000)
        with pytest.raises(E.NumberTooBigError):
            cleanup(Fraction(10) ** 6000 / 7, fractions=True)
    finally:
        sys.set_int_max_str_digits(old_limit)
