# error.py
"""Error types raised by the tokenizer / parser / evaluator pipeline.

Every error carries a four digit code (see ERROR_MESSAGES) and, once it has
left MathEngine.evaluate, the input line that produced it.
"""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        return self.message


# -----------------------------
# Parse errors
# -----------------------------

class ParseError(MathError):
    pass


class UnexpectedTokenError(ParseError):
    """A required token kind was not the one found in the stream."""
    def __init__(self, expected, found, text, pos):
        super().__init__(
            f"expected {expected.name} but got {found.name} '{text}' at byte {pos}",
            code="3011",
        )
        self.expected = expected
        self.found = found
        self.text = text
        self.pos = pos


class UnexpectedEndOfInputError(ParseError):
    def __init__(self):
        super().__init__("unexpected end of input", code="3027")


class InvalidNumberLiteralError(ParseError):
    def __init__(self, text, pos=None):
        super().__init__(f"invalid number literal: '{text}'", code="3008")
        self.text = text
        self.pos = pos


class TrailingInputError(ParseError):
    """A complete expression was parsed but tokens are left over."""
    def __init__(self, text, pos=None):
        super().__init__(f"trailing input: '{text}'", code="3012")
        self.text = text
        self.pos = pos


# -----------------------------
# Evaluation errors
# -----------------------------

class CalculationError(MathError):
    pass


class DivisionByZeroError(CalculationError):
    def __init__(self):
        super().__init__("Division by zero", code="3003")


class NonRealResultError(CalculationError):
    def __init__(self, base, exponent):
        super().__init__(f"No real result for {base} ^ {exponent}", code="3031")
        self.base = base
        self.exponent = exponent


class NumberTooBigError(CalculationError):
    def __init__(self, message="Number too big."):
        super().__init__(message, code="3026")


class ConfigError(MathError):
    pass


#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number


ERROR_MESSAGES = {
    "3003" : "Division by Zero",
    "3008" : "Invalid number literal: ", # + literal
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Trailing input: ", # + Token
    "3026" : "Number too big.",
    "3027" : "Unexpected end of input.",
    "3031" : "No real result.",
    "3032" : "Expression nested too deeply.",

    "5001" : "Not all Settings could be saved: ", # + Error raising setting
    "5002" : "Unknown setting: ", # + key
    "5003" : "Invalid value for setting: ", # + key and value

    "9999" : "Unexpected Error: " #+error
}
