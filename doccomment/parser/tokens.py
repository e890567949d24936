# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Token kinds produced by the tokenizer.

Punctuation characters each get their own kind (one token per character);
identifier-like runs and whitespace runs are grouped. `NEWLINE` and
`END_OF_INPUT` are synthesized zero-width tokens.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from doccomment.core.span import Span


class TokenKind(Enum):
	ASCII_WORD = auto()
	SPACING = auto()
	OTHER = auto()
	NEWLINE = auto()
	END_OF_INPUT = auto()
	BACKSLASH = auto()
	LESS_THAN = auto()
	GREATER_THAN = auto()
	SLASH = auto()
	EQUALS = auto()
	SINGLE_QUOTE = auto()
	DOUBLE_QUOTE = auto()
	AT_SIGN = auto()
	LEFT_CURLY_BRACKET = auto()
	RIGHT_CURLY_BRACKET = auto()
	BACKTICK = auto()
	PERIOD = auto()
	COLON = auto()
	COMMA = auto()
	LEFT_SQUARE_BRACKET = auto()
	RIGHT_SQUARE_BRACKET = auto()
	PIPE = auto()
	LEFT_PARENTHESIS = auto()
	RIGHT_PARENTHESIS = auto()
	POUND_SYMBOL = auto()
	PLUS = auto()
	DOLLAR_SIGN = auto()
	HYPHEN = auto()
	ASTERISK = auto()


# Kinds that cover exactly one punctuation character and may follow a backslash.
_NON_PUNCTUATION = (
	TokenKind.ASCII_WORD,
	TokenKind.SPACING,
	TokenKind.OTHER,
	TokenKind.NEWLINE,
	TokenKind.END_OF_INPUT,
)
PUNCTUATION_KINDS = frozenset(kind for kind in TokenKind if kind not in _NON_PUNCTUATION)


@dataclass(frozen=True)
class Token:
	"""A classified span; `line` is the content line the token came from."""

	kind: TokenKind
	span: Span
	line: Span

	@property
	def text(self) -> str:
		return self.span.text

	def __repr__(self) -> str:
		return f"Token({self.kind.name}, {self.span.text!r}, [{self.span.start},{self.span.end}))"


__all__ = ["TokenKind", "PUNCTUATION_KINDS", "Token"]
