# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostic records collected while parsing a doc comment.

Parsing is error tolerant: stages never raise for malformed input, they
append a Diagnostic to the parser context and keep going.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from .span import Span


@dataclass(frozen=True)
class Diagnostic:
	"""A non-fatal message bound to a source span."""

	message: str
	span: Span = field(default_factory=Span.empty)
	severity: str = "error"

	def __post_init__(self) -> None:
		# Normalize missing spans to the sentinel so consumers always get a Span.
		if self.span is None:  # type: ignore[unreachable]
			object.__setattr__(self, "span", Span.empty())

	@property
	def line(self) -> int:
		return self.span.location()[0]

	@property
	def column(self) -> int:
		return self.span.location()[1]


def diagnostic_to_json(diag: Diagnostic, file: str | None = None) -> Dict[str, Any]:
	"""Render a Diagnostic to a structured JSON-friendly dict."""
	line, column = diag.span.location()
	return {
		"message": diag.message,
		"severity": diag.severity,
		"file": file,
		"line": line,
		"column": column,
		"start": diag.span.start,
		"end": diag.span.end,
	}


__all__ = ["Diagnostic", "diagnostic_to_json"]
