# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Node parsing stage: token stream -> verbatim leaf nodes.

The parser walks `ctx.tokens` once and appends one node per recognized
element, in input order, to the context's verbatim-node list:

  PlainText    runs of ordinary tokens on one line
  SoftBreak    the NEWLINE token at the end of each line
  EscapedText  backslash followed by a punctuation character
  CodeSpan     `code` between two backticks on the same line
  InlineTag    {@tagName content}
  BlockTag     @tagName at the start of a line or after whitespace
  ErrorText    a token that could not be parsed (plus a diagnostic)

Failed constructs are not fatal: the opening token becomes ErrorText and
parsing resumes right after it.
"""

from __future__ import annotations

import logging
from typing import List, Optional, TYPE_CHECKING

from doccomment.core.configuration import TAG_NAME_RE, TagSyntaxKind
from doccomment.nodes import (
	BlockTag,
	CodeSpan,
	DocNode,
	ErrorText,
	EscapedText,
	InlineTag,
	PlainText,
	SoftBreak,
)
from .tokens import PUNCTUATION_KINDS, Token, TokenKind

if TYPE_CHECKING:
	from .context import ParserContext

logger = logging.getLogger(__name__)

# Tokens that end a PlainText run.
_SPECIAL_KINDS = frozenset(
	{
		TokenKind.NEWLINE,
		TokenKind.END_OF_INPUT,
		TokenKind.BACKSLASH,
		TokenKind.BACKTICK,
		TokenKind.LEFT_CURLY_BRACKET,
		TokenKind.RIGHT_CURLY_BRACKET,
		TokenKind.AT_SIGN,
	}
)


class NodeParser:
	"""Single-use parser over the tokens already stored in `ctx`."""

	def __init__(self, ctx: "ParserContext") -> None:
		self._ctx = ctx
		self._config = ctx.configuration
		self._tokens: List[Token] = list(ctx.tokens)
		self._pos = 0

	def parse(self) -> None:
		while True:
			tok = self._peek()
			if tok.kind is TokenKind.END_OF_INPUT:
				return
			if tok.kind is TokenKind.NEWLINE:
				self._pos += 1
				self._emit(SoftBreak(span=tok.span))
			elif tok.kind is TokenKind.BACKSLASH:
				self._parse_backslash()
			elif tok.kind is TokenKind.BACKTICK:
				self._parse_code_span()
			elif tok.kind is TokenKind.LEFT_CURLY_BRACKET:
				self._parse_inline_tag()
			elif tok.kind is TokenKind.RIGHT_CURLY_BRACKET:
				self._pos += 1
				self._error_token(
					tok,
					'The "}" character should be escaped using a backslash to avoid confusion with an inline tag',
				)
			elif tok.kind is TokenKind.AT_SIGN:
				self._parse_block_tag()
			else:
				self._parse_plain_text()

	# -- helpers ------------------------------------------------------------

	def _peek(self, offset: int = 0) -> Token:
		idx = min(self._pos + offset, len(self._tokens) - 1)
		return self._tokens[idx]

	def _previous(self) -> Optional[Token]:
		return self._tokens[self._pos - 1] if self._pos > 0 else None

	def _emit(self, node: DocNode) -> None:
		self._ctx.append_verbatim_node(node)

	def _error_token(self, tok: Token, message: str) -> None:
		"""Emit ErrorText for a single (already consumed) token and record it."""
		self._ctx.record_error(tok.line, message, tok.span.start, tok.span.end)
		self._emit(ErrorText(span=tok.span, text=tok.text, message=message))

	# -- productions --------------------------------------------------------

	def _parse_plain_text(self) -> None:
		first = self._peek()
		last = first
		while self._peek().kind not in _SPECIAL_KINDS:
			last = self._peek()
			self._pos += 1
		span = first.span.get_new_span(first.span.start, last.span.end)
		self._emit(PlainText(span=span, text=span.text))

	def _parse_backslash(self) -> None:
		backslash = self._peek()
		escaped = self._peek(1)
		if escaped.kind in PUNCTUATION_KINDS:
			self._pos += 2
			span = backslash.span.get_new_span(backslash.span.start, escaped.span.end)
			self._emit(EscapedText(span=span, text=escaped.text))
			return
		self._pos += 1
		# Single-character token; the default diagnostic width covers it.
		message = "A backslash must precede another character that is being escaped"
		self._ctx.record_error(backslash.line, message, backslash.span.start)
		self._emit(ErrorText(span=backslash.span, text=backslash.text, message=message))

	def _parse_code_span(self) -> None:
		opening = self._peek()
		idx = self._pos + 1
		while True:
			tok = self._tokens[idx]
			if tok.kind in (TokenKind.NEWLINE, TokenKind.END_OF_INPUT):
				self._pos += 1
				self._error_token(opening, "The code span is missing its closing backtick")
				return
			if tok.kind is TokenKind.BACKTICK:
				break
			idx += 1
		closing = self._tokens[idx]
		self._pos = idx + 1
		span = opening.span.get_new_span(opening.span.start, closing.span.end)
		code = opening.span.buffer[opening.span.end : closing.span.start]
		self._emit(CodeSpan(span=span, code=code))

	def _parse_inline_tag(self) -> None:
		opening = self._peek()
		at_sign = self._peek(1)
		name_tok = self._peek(2)
		if at_sign.kind is not TokenKind.AT_SIGN or name_tok.kind is not TokenKind.ASCII_WORD:
			self._pos += 1
			self._error_token(
				opening,
				'The "{" character must be escaped with a backslash when used outside of an inline tag',
			)
			return

		tag_name = "@" + name_tok.text
		content_parts: List[str] = []
		idx = self._pos + 3
		while True:
			tok = self._tokens[idx]
			if tok.kind is TokenKind.END_OF_INPUT or tok.kind is TokenKind.LEFT_CURLY_BRACKET:
				self._pos += 1
				self._error_token(opening, f'The inline tag "{tag_name}" is missing its closing "}}"')
				return
			if tok.kind is TokenKind.RIGHT_CURLY_BRACKET:
				break
			if tok.kind is TokenKind.NEWLINE:
				content_parts.append(" ")
			elif tok.kind is TokenKind.BACKSLASH and self._tokens[idx + 1].kind in PUNCTUATION_KINDS:
				idx += 1
				content_parts.append(self._tokens[idx].text)
			else:
				content_parts.append(tok.text)
			idx += 1

		closing = self._tokens[idx]
		self._pos = idx + 1
		span = opening.span.get_new_span(opening.span.start, closing.span.end)
		if not TAG_NAME_RE.match(tag_name):
			self._ctx.record_error(
				opening.line,
				f'Invalid tag name "{tag_name}": a tag name must start with a letter and contain only letters and digits',
				name_tok.span.start,
				name_tok.span.end,
			)
		else:
			self._check_tag(tag_name, TagSyntaxKind.INLINE, name_tok)
		self._emit(InlineTag(span=span, tag_name=tag_name, content="".join(content_parts).strip()))

	def _parse_block_tag(self) -> None:
		at_sign = self._peek()
		name_tok = self._peek(1)
		prev = self._previous()
		preceded_ok = prev is None or prev.kind in (TokenKind.SPACING, TokenKind.NEWLINE)
		tag_name = "@" + name_tok.text
		if (
			name_tok.kind is not TokenKind.ASCII_WORD
			or not preceded_ok
			or name_tok.span.start != at_sign.span.end
			or not TAG_NAME_RE.match(tag_name)
		):
			self._pos += 1
			self._error_token(
				at_sign,
				'The "@" character must be escaped with a backslash when used outside of a tag',
			)
			return
		self._pos += 2
		self._check_tag(tag_name, None, name_tok)
		span = at_sign.span.get_new_span(at_sign.span.start, name_tok.span.end)
		self._emit(BlockTag(span=span, tag_name=tag_name))

	def _check_tag(self, tag_name: str, written_as: Optional[TagSyntaxKind], name_tok: Token) -> None:
		"""
		Diagnose undefined tags and tags written with the wrong syntax.

		`written_as` is INLINE for `{@x}`; None means a bare `@x`, which is fine
		for both block and modifier tags.
		"""
		definition = self._config.find_tag(tag_name)
		pos = name_tok.span.start - 1  # include the "@"
		if definition is None:
			if not self._config.ignore_undefined_tags:
				self._ctx.record_error(
					name_tok.line,
					f'The tag "{tag_name}" is not defined in this configuration',
					pos,
					name_tok.span.end,
				)
			return
		if written_as is TagSyntaxKind.INLINE and definition.syntax_kind is not TagSyntaxKind.INLINE:
			self._ctx.record_error(
				name_tok.line,
				f'The tag "{definition.tag_name}" is not an inline tag; it must not be enclosed in "{{ }}" braces',
				pos,
				name_tok.span.end,
			)
		elif written_as is None and definition.syntax_kind is TagSyntaxKind.INLINE:
			self._ctx.record_error(
				name_tok.line,
				f'The tag "{definition.tag_name}" is an inline tag; it must be enclosed in "{{ }}" braces',
				pos,
				name_tok.span.end,
			)


def parse_nodes(ctx: "ParserContext") -> bool:
	"""Pipeline stage: append the verbatim nodes for `ctx.tokens`."""
	if not ctx.tokens:
		return True
	NodeParser(ctx).parse()
	logger.debug("parsed %d verbatim nodes", len(ctx.verbatim_nodes))
	return True


__all__ = ["NodeParser", "parse_nodes"]
