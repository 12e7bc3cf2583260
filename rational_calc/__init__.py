"""Exact rational arithmetic calculator: tokenizer, precedence climbing parser, evaluator."""

from .MathEngine import calculate, compute, evaluate
from .Parser import parse

__all__ = ["calculate", "compute", "evaluate", "parse"]
