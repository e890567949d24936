# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Optional

import pytest

from doccomment.core.configuration import ParserConfiguration
from doccomment.core.span import Span
from doccomment.nodes import (
	BlockTag,
	CodeSpan,
	ErrorText,
	EscapedText,
	InlineTag,
	PlainText,
	SoftBreak,
)
from doccomment.parser.context import ParserContext, verbatim_nodes_are_linear
from doccomment.parser.line_extractor import extract_lines
from doccomment.parser.node_parser import parse_nodes
from doccomment.parser.tokenizer import tokenize


def _parse(text: str, config: Optional[ParserConfiguration] = None) -> ParserContext:
	ctx = ParserContext(config or ParserConfiguration.standard(), Span.from_text(text))
	assert extract_lines(ctx)
	tokenize(ctx)
	parse_nodes(ctx)
	return ctx


def _types(ctx: ParserContext) -> list[type]:
	return [type(node) for node in ctx.verbatim_nodes]


def test_plain_text_and_soft_break() -> None:
	ctx = _parse("/** Hello world */")
	assert _types(ctx) == [PlainText, SoftBreak]
	text = ctx.verbatim_nodes[0]
	assert isinstance(text, PlainText)
	assert text.text == "Hello world"
	assert (text.span.start, text.span.end) == (4, 15)
	assert ctx.diagnostics == ()


def test_escaped_punctuation() -> None:
	ctx = _parse("/** a \\{ b */")
	assert _types(ctx) == [PlainText, EscapedText, PlainText, SoftBreak]
	escaped = ctx.verbatim_nodes[1]
	assert isinstance(escaped, EscapedText)
	assert escaped.text == "{"
	assert escaped.span.text == "\\{"
	assert ctx.diagnostics == ()


def test_backslash_before_letter_is_an_error() -> None:
	ctx = _parse("/** \\a */")
	assert _types(ctx) == [ErrorText, PlainText, SoftBreak]
	[diag] = ctx.diagnostics
	assert "backslash must precede" in diag.message
	assert diag.span.text == "\\"


def test_code_span() -> None:
	ctx = _parse("/** use `x = 1` here */")
	assert _types(ctx) == [PlainText, CodeSpan, PlainText, SoftBreak]
	code = ctx.verbatim_nodes[1]
	assert isinstance(code, CodeSpan)
	assert code.code == "x = 1"
	assert code.span.text == "`x = 1`"


def test_unterminated_code_span() -> None:
	ctx = _parse("/** a `b */")
	assert _types(ctx) == [PlainText, ErrorText, PlainText, SoftBreak]
	[diag] = ctx.diagnostics
	assert "closing backtick" in diag.message
	assert diag.span.text == "`"


def test_code_span_does_not_cross_lines() -> None:
	ctx = _parse("/**\n * `a\n * b`\n */")
	assert [type(n) for n in ctx.verbatim_nodes].count(ErrorText) == 2
	assert len(ctx.diagnostics) == 2


def test_inline_tag() -> None:
	ctx = _parse("/** See {@link Foo.bar | the bar}. */")
	assert _types(ctx) == [PlainText, InlineTag, PlainText, SoftBreak]
	tag = ctx.verbatim_nodes[1]
	assert isinstance(tag, InlineTag)
	assert tag.tag_name == "@link"
	assert tag.content == "Foo.bar | the bar"
	assert tag.span.text == "{@link Foo.bar | the bar}"
	assert ctx.diagnostics == ()


def test_inline_tag_spanning_lines() -> None:
	ctx = _parse("/**\n * {@link Foo\n * Bar}\n */")
	tags = [n for n in ctx.verbatim_nodes if isinstance(n, InlineTag)]
	assert len(tags) == 1
	assert tags[0].content == "Foo Bar"
	assert ctx.diagnostics == ()


def test_unclosed_inline_tag_recovers() -> None:
	ctx = _parse("/** {@link Foo */")
	assert _types(ctx) == [ErrorText, ErrorText, PlainText, SoftBreak]
	assert len(ctx.diagnostics) == 2
	assert 'missing its closing "}"' in ctx.diagnostics[0].message
	assert ctx.diagnostics[0].span.text == "{"
	assert '"@" character must be escaped' in ctx.diagnostics[1].message


def test_brace_without_tag_is_an_error() -> None:
	ctx = _parse("/** a { b */")
	assert ErrorText in _types(ctx)
	[diag] = ctx.diagnostics
	assert '"{" character must be escaped' in diag.message


def test_stray_closing_brace() -> None:
	ctx = _parse("/** a } b */")
	[diag] = ctx.diagnostics
	assert '"}" character should be escaped' in diag.message
	assert diag.span.text == "}"


def test_block_tag() -> None:
	ctx = _parse("/** @remarks hi */")
	assert _types(ctx) == [BlockTag, PlainText, SoftBreak]
	tag = ctx.verbatim_nodes[0]
	assert isinstance(tag, BlockTag)
	assert tag.tag_name == "@remarks"
	assert tag.span.text == "@remarks"
	assert ctx.diagnostics == ()


def test_at_sign_inside_word_is_an_error() -> None:
	ctx = _parse("/** a@b */")
	assert _types(ctx) == [PlainText, ErrorText, PlainText, SoftBreak]
	[diag] = ctx.diagnostics
	assert (diag.span.start, diag.span.end) == (5, 6)
	assert (diag.line, diag.column) == (1, 6)


def test_undefined_tag_reported_but_kept() -> None:
	ctx = _parse("/** @foo */")
	assert _types(ctx) == [BlockTag, SoftBreak]
	[diag] = ctx.diagnostics
	assert diag.message == 'The tag "@foo" is not defined in this configuration'
	assert diag.span.text == "@foo"


def test_undefined_tag_ignored_by_configuration() -> None:
	ctx = _parse("/** @foo {@bar} */", ParserConfiguration.standard(ignore_undefined_tags=True))
	assert ctx.diagnostics == ()


def test_inline_tag_written_as_block() -> None:
	ctx = _parse("/** @link */")
	[diag] = ctx.diagnostics
	assert "is an inline tag" in diag.message


def test_block_tag_written_inline() -> None:
	ctx = _parse("/** {@param x} */")
	assert _types(ctx) == [InlineTag, SoftBreak]
	[diag] = ctx.diagnostics
	assert "is not an inline tag" in diag.message


@pytest.mark.parametrize(
	"text",
	[
		"/** Hello */",
		"/**\n * Summary {@link A}.\n *\n * @remarks `code` and \\@ escapes\n * @param x - the x\n * @public\n */",
		"/** broken { } @ ` \\z {@link unterminated */",
		"/**\n *\n *\n * trailing @beta\n */",
	],
)
def test_verbatim_nodes_are_linear(text: str) -> None:
	ctx = _parse(text)
	nodes = ctx.verbatim_nodes
	assert nodes
	assert verbatim_nodes_are_linear(nodes)
	for earlier, later in zip(nodes, nodes[1:]):
		assert earlier.span.end <= later.span.start  # type: ignore[attr-defined]
