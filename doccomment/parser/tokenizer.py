# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tokenizer stage: turns content lines into a flat token stream.

Each line is lexed independently with lark's basic lexer and the lark token
offsets are rebased onto the line's buffer. Every line ends with a
zero-width NEWLINE token and the stream ends with one END_OF_INPUT token.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, TYPE_CHECKING

from lark import Lark

from doccomment.core.span import Span
from .tokens import Token, TokenKind
if TYPE_CHECKING:
	from .context import ParserContext

logger = logging.getLogger(__name__)

_GRAMMAR_PATH = Path(__file__).with_name("tokens.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()
_LEXER = Lark(_GRAMMAR_SRC, parser="lalr", lexer="basic", start="start")


def read_tokens(lines: Iterable[Span]) -> List[Token]:
	"""Lex `lines` (in order) into tokens covering them."""
	tokens: List[Token] = []
	last_line: Span | None = None
	for line in lines:
		for lark_tok in _LEXER.lex(line.text):
			span = line.get_new_span(line.start + lark_tok.start_pos, line.start + lark_tok.end_pos)
			tokens.append(Token(kind=TokenKind[lark_tok.type], span=span, line=line))
		tokens.append(Token(kind=TokenKind.NEWLINE, span=line.get_new_span(line.end, line.end), line=line))
		last_line = line
	if last_line is None:
		end_span = Span.empty()
		end_line = Span.empty()
	else:
		end_span = last_line.get_new_span(last_line.end, last_line.end)
		end_line = last_line
	tokens.append(Token(kind=TokenKind.END_OF_INPUT, span=end_span, line=end_line))
	return tokens


def tokenize(ctx: "ParserContext") -> bool:
	"""Pipeline stage: lex `ctx.lines` and append the tokens to the context."""
	tokens = read_tokens(ctx.lines)
	for token in tokens:
		ctx.append_token(token)
	logger.debug("tokenized %d lines into %d tokens", len(ctx.lines), len(tokens))
	return True


__all__ = ["read_tokens", "tokenize"]
