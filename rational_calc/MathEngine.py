# MathEngine.py
"""""
Core calculation engine for the exact rational calculator.

Pipeline
--------
1) Tokenizer: converts a raw input line into a lazy stream of tokens.
2) Parser: builds an Expression tree by precedence climbing.
3) Evaluator: folds the tree into one exact Fraction.
4) Formatter: renders a Fraction for display (decimal places / fractions).

Only step 4 looks at the user settings; evaluate() is a pure function of
its input line.
"""""

from fractions import Fraction

from . import config_manager as config_manager
from . import error as E
from .Parser import Expr, Number, Operator, Parser
from .Tokenizer import tokenize

# Debug toggle for optional prints in this module
debug = False

# Largest exact power result (estimated in bits) computed before giving up
MAX_POWER_BITS = 1_000_000


# -----------------------------
# Evaluator
# -----------------------------

def compute(expression):
    """Fold an Expression left to right into a Fraction."""
    total = compute_atom(expression.lhs)

    for operator, rhs in expression.operations:
        value = compute(rhs)

        if operator is Operator.Addition:
            total = total + value
        elif operator is Operator.Subtraction:
            total = total - value
        elif operator is Operator.Multiplication:
            total = total * value
        elif operator is Operator.Division:
            if value == 0:
                raise E.DivisionByZeroError()
            total = total / value
        elif operator is Operator.Power:
            total = power(total, value)

    return total


def compute_atom(atom):
    if isinstance(atom, Number):
        return atom.value
    elif isinstance(atom, Expr):
        return compute(atom.expression)
    raise TypeError(f"Not an atom: {atom!r}")


def power(base, exponent):
    """base ^ exponent.

    Integer exponents are exact (negative ones give the reciprocal power).
    Any other exponent goes through float and back, so the result is only
    as good as a double.
    """
    if exponent.denominator == 1:
        exponent = int(exponent)
        # 0, 1 and -1 stay small for any exponent
        if abs(base.numerator) > 1 or base.denominator > 1:
            bits = max(base.numerator.bit_length(), base.denominator.bit_length())
            if abs(exponent) * bits > MAX_POWER_BITS:
                raise E.NumberTooBigError(f"Number too big: {base} ^ {exponent}")
        try:
            return base ** exponent
        except ZeroDivisionError:
            raise E.DivisionByZeroError() from None

    if base < 0:
        raise E.NonRealResultError(base, exponent)
    if base == 0 and exponent < 0:
        raise E.DivisionByZeroError()

    try:
        return Fraction(float(base) ** float(exponent))
    except OverflowError:
        raise E.NumberTooBigError(f"Number too big: {base} ^ {exponent}") from None
    except ZeroDivisionError:
        # base underflowed to 0.0
        raise E.DivisionByZeroError() from None


# -----------------------------
# Public entry point
# -----------------------------

def evaluate(problem):
    """Main API: tokenize -> parse -> compute. Returns an exact Fraction.

    Raises a MathError subclass with `equation` set to `problem`.
    """
    try:
        if debug == True:
            print(list(tokenize(problem)))

        expression = Parser(tokenize(problem)).parse()

        if debug == True:
            print("Final tree:")
            print(expression)

        return compute(expression)

    except RecursionError:
        raise E.ParseError("Expression is nested too deeply.", code="3032",
                           equation=problem) from None
    # Re-raise our domain errors after attaching the source equation
    except E.MathError as e:
        e.equation = problem
        raise


# -----------------------------
# Result formatting
# -----------------------------

def cleanup(result, decimal_places=24, fractions=False):
    """Format a Fraction as a decimal or (mixed) fraction string.

    Returns:
        (rendered_value, rounding_flag)
    where rounding_flag tells whether the rendered value is not exact.
    Raises NumberTooBigError when Python refuses to print the integers
    (int max str digits).
    """
    places = max(int(decimal_places), 0)
    try:
        if result.denominator == 1:
            return str(result.numerator), False

        sign = "-" if result < 0 else ""

        if fractions == True:
            ganzzahl, rest_zaehler = divmod(abs(result.numerator), result.denominator)
            if ganzzahl == 0:
                return f"{sign}{rest_zaehler}/{result.denominator}", False
            # Mixed fraction form (e.g., 3/2 -> "1 1/2")
            return f"{sign}{ganzzahl} {rest_zaehler}/{result.denominator}", False

        scale = 10 ** places
        scaled = round(result * scale)  # round half to even, like Decimal.quantize
        rounding = Fraction(scaled, scale) != result

        sign = "-" if scaled < 0 else ""
        ganzzahl, nachkomma = divmod(abs(scaled), scale)
        ausgabe_string = f"{sign}{ganzzahl}"

        digits = str(nachkomma).rjust(places, "0").rstrip("0")
        if digits:
            ausgabe_string += "." + digits

        return ausgabe_string, rounding
    except ValueError:
        raise E.NumberTooBigError("Number too big to display.") from None


def display(rendered_value, rounding):
    """Prefix a rendered value with '=' or '≈'."""
    ungefaehr_zeichen = "\u2248"  # "≈"
    if rounding == True:
        return f"{ungefaehr_zeichen} {rendered_value}"
    return f"= {rendered_value}"


def calculate(problem, settings=None):
    """evaluate() + cleanup() using the display settings; returns e.g. '= 14'."""
    if settings is None:
        settings = config_manager.load_setting_value("all")

    ergebnis = evaluate(problem)
    rendered_value, rounding = cleanup(
        ergebnis,
        decimal_places=settings.get("decimal_places", 24),
        fractions=settings.get("fractions", False),
    )
    return display(rendered_value, rounding)
