# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by every parser stage.

A Span is a half-open `[start, end)` range over an immutable text buffer.
Derived spans (lines, tokens, node excerpts, diagnostic ranges) are created
with `get_new_span`, which keeps the same buffer object so offsets stay
comparable across stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Span:
	"""Immutable half-open range over a text buffer."""

	buffer: str
	start: int
	end: int

	@classmethod
	def from_text(cls, text: str) -> "Span":
		"""Construct a span covering the whole of `text`."""
		return cls(buffer=text, start=0, end=len(text))

	@classmethod
	def empty(cls) -> "Span":
		"""Return the shared empty sentinel (empty buffer, zero width)."""
		return _EMPTY_SPAN

	def get_new_span(self, start: int, end: int) -> "Span":
		"""
		Derive a span over the same buffer with different bounds.

		No bounds checking happens here: callers recording diagnostics may pass
		offsets past the end of the buffer and the result is kept as given.
		Use `is_valid` to detect such spans.
		"""
		return Span(buffer=self.buffer, start=start, end=end)

	@property
	def length(self) -> int:
		return self.end - self.start

	@property
	def text(self) -> str:
		return self.buffer[self.start : self.end]

	def is_empty(self) -> bool:
		return self.end <= self.start

	def is_valid(self) -> bool:
		"""True when `0 <= start <= end <= len(buffer)`."""
		return 0 <= self.start <= self.end <= len(self.buffer)

	def location(self, offset: int | None = None) -> Tuple[int, int]:
		"""
		Map a buffer offset (default: `start`) to a 1-based (line, column).

		The offset is clamped into the buffer so spans recorded past the end
		still render a usable location.
		"""
		if offset is None:
			offset = self.start
		offset = max(0, min(offset, len(self.buffer)))
		line = self.buffer.count("\n", 0, offset) + 1
		line_start = self.buffer.rfind("\n", 0, offset) + 1
		return line, offset - line_start + 1

	def __str__(self) -> str:
		return self.text


_EMPTY_SPAN = Span(buffer="", start=0, end=0)


__all__ = ["Span"]
