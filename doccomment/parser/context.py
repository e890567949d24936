# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
ParserContext: all state built up by the parser stages for one comment.

Stages run in a fixed order against a single context:

  extract_lines -> tokenize -> parse_nodes -> assemble_document

and each one writes its own field through a narrow mutator
(`set_comment_span`, `append_line`, `append_token`,
`append_verbatim_node`). The mutators check the ordering invariants at the
boundary and raise `ParserContextError` when a stage breaks them; those are
bugs in a stage, not problems in the input. Problems in the input are
recorded with `record_error` and never interrupt the pipeline.

One context corresponds to exactly one comment; do not reuse it.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from doccomment.core.configuration import ParserConfiguration
from doccomment.core.diagnostics import Diagnostic
from doccomment.core.span import Span
from doccomment.nodes import LEAF_NODE_TYPES, DocComment, DocNode
from .tokens import Token


class ParserContextError(RuntimeError):
	"""A stage wrote to the context out of order or after finalization."""


class ParserContext:
	"""
	Tracks configuration, source/comment spans, lines, tokens, verbatim nodes,
	the document being assembled and the diagnostic log.
	"""

	def __init__(self, configuration: ParserConfiguration, source_span: Span) -> None:
		self._configuration = configuration
		self._source_span = source_span
		# Text range from the opening `/**` to the end of the closing `*/`.
		self._comment_span: Span = Span.empty()
		self._comment_span_set = False
		self._lines: List[Span] = []
		self._tokens: List[Token] = []
		# Every leaf node from the first pass, in input order with no overlap.
		# The assembled document may regroup, reorder or drop some of them
		# (sections, promoted modifier tags); this list keeps the raw order.
		self._verbatim_nodes: List[DocNode] = []
		self._diagnostics: List[Diagnostic] = []
		self._finalized = False
		self._doc_comment = DocComment(parser_context=self)

	# -- read access --------------------------------------------------------

	@property
	def configuration(self) -> ParserConfiguration:
		return self._configuration

	@property
	def source_span(self) -> Span:
		return self._source_span

	@property
	def comment_span(self) -> Span:
		return self._comment_span

	@property
	def lines(self) -> Tuple[Span, ...]:
		return tuple(self._lines)

	@property
	def tokens(self) -> Tuple[Token, ...]:
		return tuple(self._tokens)

	@property
	def verbatim_nodes(self) -> Tuple[DocNode, ...]:
		return tuple(self._verbatim_nodes)

	@property
	def doc_comment(self) -> DocComment:
		return self._doc_comment

	@property
	def diagnostics(self) -> Tuple[Diagnostic, ...]:
		return tuple(self._diagnostics)

	@property
	def is_finalized(self) -> bool:
		return self._finalized

	def has_errors(self) -> bool:
		return bool(self._diagnostics)

	# -- stage mutators -----------------------------------------------------

	def set_comment_span(self, span: Span) -> None:
		self._check_writable("set_comment_span")
		if self._lines:
			raise ParserContextError("comment span must be set before lines are appended")
		if self._comment_span_set:
			raise ParserContextError("comment span has already been set")
		if span.start > span.end:
			raise ParserContextError(f"inverted comment span [{span.start},{span.end})")
		self._comment_span = span
		self._comment_span_set = True

	def append_line(self, line: Span) -> None:
		self._check_writable("append_line")
		if self._tokens:
			raise ParserContextError("cannot append lines after tokenization has started")
		if line.start > line.end:
			raise ParserContextError(f"inverted line span [{line.start},{line.end})")
		if self._lines and line.start < self._lines[-1].end:
			prev = self._lines[-1]
			raise ParserContextError(
				f"line [{line.start},{line.end}) overlaps or precedes previous line [{prev.start},{prev.end})"
			)
		comment = self._comment_span
		if self._comment_span_set and not (comment.start <= line.start and line.end <= comment.end):
			raise ParserContextError(
				f"line [{line.start},{line.end}) lies outside the comment span [{comment.start},{comment.end})"
			)
		self._lines.append(line)

	def append_token(self, token: Token) -> None:
		self._check_writable("append_token")
		if self._verbatim_nodes:
			raise ParserContextError("cannot append tokens after node parsing has started")
		if self._tokens and token.span.start < self._tokens[-1].span.end:
			raise ParserContextError(f"token {token!r} overlaps or precedes {self._tokens[-1]!r}")
		self._tokens.append(token)

	def append_verbatim_node(self, node: DocNode) -> None:
		self._check_writable("append_verbatim_node")
		span = _node_span(node)
		if span.start > span.end:
			raise ParserContextError(f"inverted node span [{span.start},{span.end})")
		if self._verbatim_nodes:
			prev = _node_span(self._verbatim_nodes[-1])
			if span.start < prev.end:
				raise ParserContextError(
					f"verbatim node [{span.start},{span.end}) overlaps or precedes previous node [{prev.start},{prev.end})"
				)
		self._verbatim_nodes.append(node)

	def finalize(self) -> None:
		"""Mark assembly complete; later stage writes raise ParserContextError."""
		self._finalized = True

	def _check_writable(self, op: str) -> None:
		if self._finalized:
			raise ParserContextError(f"{op}: parser context is finalized")

	# -- diagnostics --------------------------------------------------------

	def record_error(self, span: Span, message: str, position: int, end: Optional[int] = None) -> None:
		"""
		Record a diagnostic at `[position, end)` over `span`'s buffer.

		When `end` is omitted the diagnostic covers one character, or is
		zero-width when `position` is at/after the end of the buffer. An
		explicit `end` (including 0) is used as given. `position` is not
		validated or clamped. Never raises; the log is append-only.
		"""
		if end is None:
			if position + 1 <= len(span.buffer):
				end = position + 1
			else:
				end = position
		self._diagnostics.append(Diagnostic(message=message, span=span.get_new_span(position, end)))


def _node_span(node: DocNode) -> Span:
	if not isinstance(node, LEAF_NODE_TYPES):
		raise ParserContextError(f"{type(node).__name__} is not a leaf node")
	return node.span


def verbatim_nodes_are_linear(nodes: Sequence[DocNode]) -> bool:
	"""True when every node ends at or before the next one starts."""
	spans = [_node_span(node) for node in nodes]
	return all(a.end <= b.start for a, b in zip(spans, spans[1:]))


__all__ = ["ParserContext", "ParserContextError", "verbatim_nodes_are_linear"]
