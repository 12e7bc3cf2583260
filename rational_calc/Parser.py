# Parser.py
"""Precedence climbing parser.

Tree shape
----------
An Expression is a left operand (an atom) followed by a list of
(operator, Expression) pairs. Evaluating it is a left fold over that list,
the precedence and associativity are already resolved by the way the
parser nests the right hand sides:

    2 * 3 + 4      ->  Expression(2, [(*, 3), (+, 4)])
    2 ^ 3 ^ 2      ->  Expression(2, [(^, Expression(3, [(^, 2)]))])
    2 + 3 * 4      ->  Expression(2, [(+, Expression(3, [(*, 4)]))])

Unary signs are resolved at parse time: '-' pushes the sign into the
operand tree instead of creating a node for it.
"""

from enum import Enum
from fractions import Fraction

from . import error as E
from .Tokenizer import TokenType, tokenize


# -----------------------------
# Operators
# -----------------------------

class Associativity(Enum):
    Left = "left"
    Right = "right"


class Operator(Enum):
    Addition = "+"
    Subtraction = "-"
    Multiplication = "*"
    Division = "/"
    Power = "^"

    def properties(self):
        """Return (precedence, associativity)."""
        if self in (Operator.Addition, Operator.Subtraction):
            return 0, Associativity.Left
        elif self in (Operator.Multiplication, Operator.Division):
            return 1, Associativity.Left
        else:
            return 2, Associativity.Right


BINARY_OPERATORS = {
    TokenType.Plus: Operator.Addition,
    TokenType.Minus: Operator.Subtraction,
    TokenType.Asterisk: Operator.Multiplication,
    TokenType.ForwardSlash: Operator.Division,
    TokenType.Caret: Operator.Power,
}


def to_binary_operator(token):
    """Map a token to its binary operator, or None if it is not one."""
    return BINARY_OPERATORS.get(token.ttype)


# -----------------------------
# Tree node types
# -----------------------------

class Number:
    """Atom holding a literal exact value."""
    def __init__(self, value):
        self.value = Fraction(value)

    def __neg__(self):
        return Number(-self.value)

    def __eq__(self, other):
        return isinstance(other, Number) and self.value == other.value

    def __repr__(self):
        return f"Number({self.value})"


class Expr:
    """Atom holding a parenthesized sub-expression."""
    def __init__(self, expression):
        self.expression = expression

    def __neg__(self):
        return Expr(-self.expression)

    def __eq__(self, other):
        return isinstance(other, Expr) and self.expression == other.expression

    def __repr__(self):
        return f"Expr({self.expression!r})"


class Expression:
    """Left operand plus the ordered (operator, right operand) pairs folded onto it."""
    def __init__(self, lhs, operations=None):
        self.lhs = lhs
        self.operations = list(operations or [])

    def __neg__(self):
        # -(a ^ b) cannot be distributed over the operands
        if any(op is Operator.Power for op, _ in self.operations):
            return Expression(
                Number(-1),
                [(Operator.Multiplication, Expression(Expr(self)))],
            )

        # -(a + b) = -a + -b,  -(a * b) = -a * b
        operations = []
        for op, rhs in self.operations:
            if op in (Operator.Addition, Operator.Subtraction):
                rhs = -rhs
            operations.append((op, rhs))
        return Expression(-self.lhs, operations)

    def __eq__(self, other):
        return (isinstance(other, Expression)
                and self.lhs == other.lhs
                and self.operations == other.operations)

    def __repr__(self):
        if not self.operations:
            return f"Expression({self.lhs!r})"
        operations = ", ".join(f"({op.value}, {rhs!r})" for op, rhs in self.operations)
        return f"Expression({self.lhs!r}, [{operations}])"


# -----------------------------
# Parser
# -----------------------------

class Parser:
    """Builds an Expression from a token iterator.

    One Parser consumes one token stream; build a new one for every line.
    """

    def __init__(self, tokens):
        self.tokens = iter(tokens)
        self.lookahead = None

    def parse(self):
        """Parse one complete expression and require the input to be used up."""
        expression = self.parse_expression(0)

        token = self.next_token()
        if token is not None:
            raise E.TrailingInputError(token.value, token.pos)

        return expression

    # ---- token helpers ----

    def peek(self):
        if self.lookahead is None:
            self.lookahead = next(self.tokens, None)
        return self.lookahead

    def next_token(self):
        token = self.peek()
        self.lookahead = None
        return token

    def eat(self, ttype):
        """Consume the next token, which must be of kind `ttype`."""
        token = self.next_token()
        if token is None:
            raise E.UnexpectedEndOfInputError()
        if token.ttype != ttype:
            raise E.UnexpectedTokenError(ttype, token.ttype, token.value, token.pos)
        return token

    def try_eat(self, ttype):
        token = self.peek()
        if token is not None and token.ttype == ttype:
            return self.next_token()
        return None

    # ---- grammar ----

    def parse_expression(self, min_prec):
        lhs = self.parse_atom()
        operations = []

        while True:
            token = self.peek()
            if token is None:
                break

            op = to_binary_operator(token)
            if op is None:
                break  # ')' or trailing input, left for the caller

            prec, assoc = op.properties()
            if prec < min_prec:
                break
            self.next_token()

            if assoc is Associativity.Left:
                next_min_prec = prec + 1
            else:
                next_min_prec = prec

            rhs = self.parse_expression(next_min_prec)
            operations.append((op, rhs))

        return Expression(lhs, operations)

    def parse_atom(self):
        if self.try_eat(TokenType.Plus):
            return self.parse_atom()
        elif self.try_eat(TokenType.Minus):
            return -self.parse_atom()
        elif self.try_eat(TokenType.OpeningParen):
            expression = self.parse_expression(0)
            self.eat(TokenType.ClosingParen)
            return Expr(expression)
        else:
            return self.parse_number()

    def parse_number(self):
        """Number literal -> exact value of the nearest double.

        '0.1' therefore becomes 3602879701896397/36028797018963968, not 1/10.
        """
        token = self.eat(TokenType.Number)
        try:
            value = float(token.value)
        except ValueError:
            raise E.InvalidNumberLiteralError(token.value, token.pos) from None

        try:
            return Number(Fraction(value))
        except OverflowError:
            # too many digits for a double: float() gave inf
            raise E.InvalidNumberLiteralError(token.value, token.pos) from None


def parse(source):
    """Tokenize and parse one line of input."""
    return Parser(tokenize(source)).parse()
