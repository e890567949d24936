# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from doccomment.core.diagnostics import Diagnostic, diagnostic_to_json
from doccomment.core.span import Span


def test_from_text_covers_whole_buffer() -> None:
	span = Span.from_text("/** foo */")
	assert (span.start, span.end) == (0, 10)
	assert span.length == 10
	assert span.text == "/** foo */"


def test_get_new_span_shares_buffer() -> None:
	text = "hello world"
	span = Span.from_text(text)
	sub = span.get_new_span(6, 11)
	assert sub.buffer is span.buffer
	assert sub.text == "world"
	assert str(sub) == "world"


def test_empty_is_a_shared_sentinel() -> None:
	assert Span.empty() is Span.empty()
	assert Span.empty().is_empty()
	assert Span.empty().buffer == ""


def test_get_new_span_does_not_validate() -> None:
	span = Span.from_text("abc")
	past_end = span.get_new_span(7, 7)
	assert (past_end.start, past_end.end) == (7, 7)
	assert not past_end.is_valid()
	inverted = span.get_new_span(2, 0)
	assert not inverted.is_valid()
	assert span.get_new_span(3, 3).is_valid()


def test_location_is_one_based_and_clamped() -> None:
	span = Span.from_text("ab\ncd")
	assert span.location(0) == (1, 1)
	assert span.location(4) == (2, 2)
	assert span.location(100) == (2, 3)
	assert span.get_new_span(3, 4).location() == (2, 1)


def test_diagnostic_defaults_and_json() -> None:
	buf = Span.from_text("x\n  @oops")
	diag = Diagnostic(message="bad", span=buf.get_new_span(4, 9))
	assert diag.severity == "error"
	assert (diag.line, diag.column) == (2, 3)
	assert diagnostic_to_json(diag, "a.ts") == {
		"message": "bad",
		"severity": "error",
		"file": "a.ts",
		"line": 2,
		"column": 3,
		"start": 4,
		"end": 9,
	}


def test_diagnostic_missing_span_normalized() -> None:
	diag = Diagnostic(message="no span", span=None)  # type: ignore[arg-type]
	assert diag.span is Span.empty()
