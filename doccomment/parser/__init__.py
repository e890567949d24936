# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Doc comment parser entry points.

`DocCommentParser.parse_string` builds a ParserContext for the input and runs
the default pipeline over it; the returned context carries the lines,
tokens, verbatim nodes, the assembled `doc_comment` and all diagnostics.
"""

from __future__ import annotations

from typing import Optional

from doccomment.core.configuration import ParserConfiguration
from doccomment.core.span import Span
from .context import ParserContext, ParserContextError
from .pipeline import ParserPipeline


class DocCommentParser:
	def __init__(
		self,
		configuration: Optional[ParserConfiguration] = None,
		pipeline: Optional[ParserPipeline] = None,
	) -> None:
		self.configuration = configuration or ParserConfiguration.standard()
		self.pipeline = pipeline or ParserPipeline.default()

	def parse_string(self, text: str) -> ParserContext:
		return self.parse_span(Span.from_text(text))

	def parse_span(self, span: Span) -> ParserContext:
		"""Parse the comment found in `span` (which may be part of a larger file)."""
		ctx = ParserContext(self.configuration, span)
		return self.pipeline.run(ctx)


def parse_doc_comment(text: str, configuration: Optional[ParserConfiguration] = None) -> ParserContext:
	"""Convenience wrapper around `DocCommentParser(configuration).parse_string(text)`."""
	return DocCommentParser(configuration).parse_string(text)


__all__ = [
	"DocCommentParser",
	"ParserContext",
	"ParserContextError",
	"ParserPipeline",
	"parse_doc_comment",
]
