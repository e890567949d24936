# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Line extraction stage.

Finds the `/** ... */` comment in the source span and splits its body into
content lines:

  - leading whitespace before `/**` is skipped; anything else is an error,
  - one space after `/**` and after each continuation `*` is dropped,
  - trailing whitespace on every line is dropped,
  - an empty first line directly after `/**` is not reported,
  - blank lines in the body become zero-width line spans.

On failure (no comment, or no closing `*/`) a diagnostic is recorded and no
lines are written, so later stages are skipped by the pipeline.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, TYPE_CHECKING

from doccomment.core.span import Span

if TYPE_CHECKING:
	from .context import ParserContext

logger = logging.getLogger(__name__)


class _State(Enum):
	BEGIN_COMMENT1 = auto()  # looking for "/"
	BEGIN_COMMENT2 = auto()  # saw "/*", expecting the second "*"
	COLLECTING_FIRST_LINE = auto()
	COLLECTING_LINE = auto()
	ADVANCING_LINE = auto()  # after a newline, before the continuation "*"
	DONE = auto()


def _is_whitespace(ch: str) -> bool:
	return ch in " \t\r\n\f\v"


def extract_lines(ctx: "ParserContext") -> bool:
	"""Pipeline stage: set `ctx.comment_span` and append the content lines."""
	source = ctx.source_span
	buffer = source.buffer
	end = source.end

	comment_start = 0
	comment_end = 0
	line_start = 0
	line_end = 0
	lines: List[Span] = []
	state = _State.BEGIN_COMMENT1
	idx = source.start

	while state is not _State.DONE:
		if idx >= end:
			if state in (_State.BEGIN_COMMENT1, _State.BEGIN_COMMENT2):
				ctx.record_error(source, 'Expecting a "/**" comment', source.start, source.end)
			else:
				ctx.record_error(source, "Unexpected end of input", source.start, source.end)
			return False

		cur = buffer[idx]
		cur_idx = idx
		idx += 1
		nxt = buffer[idx] if idx < end else ""

		if state is _State.BEGIN_COMMENT1:
			if cur == "/" and nxt == "*":
				comment_start = cur_idx
				idx += 1
				state = _State.BEGIN_COMMENT2
			elif not _is_whitespace(cur):
				ctx.record_error(source, 'Expecting a leading "/**"', cur_idx)
				return False
		elif state is _State.BEGIN_COMMENT2:
			if cur == "*":
				if nxt == " ":
					idx += 1
				line_start = line_end = idx
				state = _State.COLLECTING_FIRST_LINE
			else:
				ctx.record_error(source, 'Expecting a leading "/**"', cur_idx)
				return False
		elif state in (_State.COLLECTING_FIRST_LINE, _State.COLLECTING_LINE):
			if cur == "\n":
				# "/**" followed directly by a line break yields no first line.
				if state is not _State.COLLECTING_FIRST_LINE or line_end > line_start:
					lines.append(source.get_new_span(line_start, line_end))
				line_start = line_end = idx
				state = _State.ADVANCING_LINE
			elif cur == "*" and nxt == "/":
				if line_end > line_start:
					lines.append(source.get_new_span(line_start, line_end))
				idx += 1
				comment_end = idx
				state = _State.DONE
			elif not _is_whitespace(cur):
				line_end = idx
		elif state is _State.ADVANCING_LINE:
			if cur == "*":
				if nxt == "/":
					idx += 1
					comment_end = idx
					state = _State.DONE
				else:
					if nxt == " ":
						idx += 1
					line_start = line_end = idx
					state = _State.COLLECTING_LINE
			elif cur == "\n":
				# Blank line without a continuation "*".
				lines.append(source.get_new_span(cur_idx, cur_idx))
				line_start = line_end = idx
			elif not _is_whitespace(cur):
				line_end = idx
				state = _State.COLLECTING_LINE

	ctx.set_comment_span(source.get_new_span(comment_start, comment_end))
	for line in lines:
		ctx.append_line(line)
	logger.debug("extracted %d lines from comment [%d,%d)", len(lines), comment_start, comment_end)
	return True


__all__ = ["extract_lines"]
