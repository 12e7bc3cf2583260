# Tokenizer.py
"""Lazy tokenizer: turns one input line into a stream of Tokens.

The tokenizer never rejects input. Anything that is not an operator, a
parenthesis or a number becomes an Identifier token and is left for the
parser to complain about.
"""

import string
from enum import Enum
from typing import Iterator, NamedTuple


class TokenType(Enum):
    Identifier = "identifier"
    Number = "number"
    Plus = "+"
    Minus = "-"
    Asterisk = "*"
    ForwardSlash = "/"
    Caret = "^"
    OpeningParen = "("
    ClosingParen = ")"


class Token(NamedTuple):
    ttype: TokenType
    value: str
    pos: int  # byte offset (UTF-8) of the first character in the line


# Single character tokens
SINGLE_CHAR_TOKENS = {
    "+": TokenType.Plus,
    "-": TokenType.Minus,
    "*": TokenType.Asterisk,
    "/": TokenType.ForwardSlash,
    "^": TokenType.Caret,
    "(": TokenType.OpeningParen,
    ")": TokenType.ClosingParen,
}


def is_number_char(char):
    """ASCII digits and the decimal point; shape is validated by the parser."""
    return char in string.digits or char == "."


def is_identifier_char(char):
    return not (char.isspace() or char in string.punctuation)


def byte_length(char):
    return len(char.encode("utf-8"))


class Tokenizer:
    """Iterator over the tokens of a single line.

    Not restartable: build a new Tokenizer for every line.
    """

    def __init__(self, source: str):
        self.source = source
        self.index = 0  # character index into source
        self.pos = 0    # byte offset matching self.index

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        self.skip_whitespace()

        if self.index >= len(self.source):
            raise StopIteration

        start_index = self.index
        start_pos = self.pos
        current_char = self.advance()

        if current_char in SINGLE_CHAR_TOKENS:
            ttype = SINGLE_CHAR_TOKENS[current_char]
        elif is_number_char(current_char):
            self.advance_while(is_number_char)
            ttype = TokenType.Number
        else:
            # The first character is taken as-is, even if it is punctuation
            self.advance_while(is_identifier_char)
            ttype = TokenType.Identifier

        return Token(ttype, self.source[start_index:self.index], start_pos)

    def advance(self):
        current_char = self.source[self.index]
        self.index += 1
        self.pos += byte_length(current_char)
        return current_char

    def advance_while(self, predicate):
        while self.index < len(self.source) and predicate(self.source[self.index]):
            self.advance()

    def skip_whitespace(self):
        self.advance_while(str.isspace)


def tokenize(source: str) -> Tokenizer:
    """Return a fresh token iterator for `source`."""
    return Tokenizer(source)
