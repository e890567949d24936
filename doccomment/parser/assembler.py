# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Assembly stage: verbatim nodes -> DocComment.

Walks `ctx.verbatim_nodes` in order and routes every node into the
document that the context created:

  - nodes before the first block tag form the summary section,
  - modifier tags are promoted into `doc.modifier_tags` and dropped from
    the content,
  - each block tag opens a new block whose section receives the following
    nodes,
  - `{@inheritDoc}` is stored on the document instead of in a section.

This is the only stage that breaks the linear order of the verbatim nodes.
Finally each section is split into paragraphs on blank lines.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, TYPE_CHECKING

from doccomment.core.configuration import TagSyntaxKind
from doccomment.nodes import (
	Block,
	BlockTag,
	DocComment,
	DocNode,
	InlineTag,
	Paragraph,
	ParamBlock,
	PlainText,
	Section,
	SoftBreak,
)

if TYPE_CHECKING:
	from .context import ParserContext

logger = logging.getLogger(__name__)

# `  name -  rest`; the hyphen separator is optional.
_PARAM_NAME_RE = re.compile(r"^\s*([A-Za-z_$][\w$.]*)\s*(?:-\s*)?")

# Block tags stored in their own attribute on DocComment.
_SINGLETON_BLOCKS = {
	"@REMARKS": "remarks_block",
	"@PRIVATEREMARKS": "private_remarks",
	"@DEPRECATED": "deprecated_block",
	"@RETURNS": "returns_block",
}


class DocumentAssembler:
	"""Single-use assembler for one parser context."""

	def __init__(self, ctx: "ParserContext") -> None:
		self._ctx = ctx
		self._doc: DocComment = ctx.doc_comment
		self._current: Section = self._doc.summary_section
		self._pending_param: Optional[ParamBlock] = None
		self._seen_tags: set[str] = set()

	def assemble(self) -> DocComment:
		for node in self._ctx.verbatim_nodes:
			if self._pending_param is not None:
				node = self._take_param_name(self._pending_param, node)
				self._pending_param = None
				if node is None:
					continue
			if isinstance(node, BlockTag):
				self._start_block(node)
			elif isinstance(node, InlineTag) and node.tag_name.upper() == "@INHERITDOC":
				self._set_inherit_doc(node)
			else:
				self._current.append(node)
		if self._pending_param is not None:
			self._report_missing_param_name(self._pending_param)
		for section in self._doc.sections():
			section.paragraphs = split_paragraphs(section.nodes)
		return self._doc

	def _start_block(self, tag: BlockTag) -> None:
		config = self._ctx.configuration
		definition = config.find_tag(tag.tag_name)
		key = tag.tag_name.upper()

		if definition is not None and definition.syntax_kind is TagSyntaxKind.MODIFIER:
			if not self._doc.modifier_tags.add(tag):
				self._ctx.record_error(
					tag.span, f'The modifier tag "{tag.tag_name}" appears more than once', tag.span.start, tag.span.end
				)
			return

		if definition is not None and not definition.allow_multiple and key in self._seen_tags:
			self._ctx.record_error(
				tag.span,
				f'The block tag "{tag.tag_name}" should not be repeated',
				tag.span.start,
				tag.span.end,
			)
		self._seen_tags.add(key)

		if key in ("@PARAM", "@TYPEPARAM"):
			block: Block = ParamBlock(block_tag=tag)
			(self._doc.params if key == "@PARAM" else self._doc.type_params).append(block)
			self._pending_param = block
		else:
			block = Block(block_tag=tag)
			attr = _SINGLETON_BLOCKS.get(key)
			if attr is not None:
				# A repeated singleton keeps the first block; the repeat is still
				# collected so its content is not lost.
				if getattr(self._doc, attr) is None:
					setattr(self._doc, attr, block)
				else:
					self._doc.custom_blocks.append(block)
			elif key == "@SEE":
				self._doc.see_blocks.append(block)
			else:
				self._doc.custom_blocks.append(block)
		self._current = block.content

	def _take_param_name(self, block: ParamBlock, node: DocNode) -> Optional[DocNode]:
		"""
		Parse the parameter name from the node right after `@param`.

		Returns what is left of `node` for the block content (None when the
		whole node was consumed).
		"""
		if not isinstance(node, PlainText):
			self._report_missing_param_name(block)
			return node
		m = _PARAM_NAME_RE.match(node.text)
		if m is None:
			self._report_missing_param_name(block)
			return node
		block.parameter_name = m.group(1)
		if m.end() == len(node.text):
			return None
		# PlainText never spans lines, so text offsets map directly onto the buffer.
		rest = node.span.get_new_span(node.span.start + m.end(), node.span.end)
		return PlainText(span=rest, text=rest.text)

	def _report_missing_param_name(self, block: ParamBlock) -> None:
		tag = block.block_tag
		self._ctx.record_error(
			tag.span,
			f'The {tag.tag_name} block should be followed by a parameter name',
			tag.span.start,
			tag.span.end,
		)

	def _set_inherit_doc(self, node: InlineTag) -> None:
		if self._doc.inherit_doc_tag is not None:
			self._ctx.record_error(
				node.span, "A doc comment cannot have more than one {@inheritDoc} tag", node.span.start, node.span.end
			)
			return
		self._doc.inherit_doc_tag = node


def _is_blank(line: List[DocNode]) -> bool:
	return all(isinstance(node, PlainText) and node.is_whitespace() for node in line)


def split_paragraphs(nodes: List[DocNode]) -> List[Paragraph]:
	"""
	Group a section's leaf nodes into paragraphs.

	A line is the run of nodes up to a SoftBreak. Lines with only whitespace
	separate paragraphs; they and any leading/trailing blank lines are
	dropped. SoftBreaks between lines of the same paragraph are kept.
	Leading whitespace of the first PlainText and trailing whitespace of the
	last one are pruned, and PlainText left empty by that is dropped.
	"""
	lines: List[List[DocNode]] = [[]]
	for node in nodes:
		if isinstance(node, SoftBreak):
			lines[-1].append(node)
			lines.append([])
		else:
			lines[-1].append(node)

	paragraphs: List[Paragraph] = []
	current: List[DocNode] = []
	for line in lines:
		content = [n for n in line if not isinstance(n, SoftBreak)]
		if _is_blank(content):
			if current:
				paragraphs.append(Paragraph(nodes=_trim_edges(current)))
				current = []
			continue
		current.extend(line)
	if current:
		paragraphs.append(Paragraph(nodes=_trim_edges(current)))
	return paragraphs


def _slice_text(node: PlainText, start: int, end: int) -> PlainText:
	span = node.span.get_new_span(node.span.start + start, node.span.start + end)
	return PlainText(span=span, text=node.text[start:end])


def _trim_edges(nodes: List[DocNode]) -> List[DocNode]:
	nodes = list(nodes)
	while nodes and isinstance(nodes[0], PlainText):
		first = nodes[0]
		stripped = first.text.lstrip()
		if not stripped:
			del nodes[0]
			continue
		if len(stripped) != len(first.text):
			nodes[0] = _slice_text(first, len(first.text) - len(stripped), len(first.text))
		break
	while nodes and isinstance(nodes[-1], (PlainText, SoftBreak)):
		last = nodes[-1]
		if isinstance(last, SoftBreak):
			del nodes[-1]
			continue
		stripped = last.text.rstrip()
		if not stripped:
			del nodes[-1]
			continue
		if len(stripped) != len(last.text):
			nodes[-1] = _slice_text(last, 0, len(stripped))
		break
	return nodes


def assemble_document(ctx: "ParserContext") -> bool:
	"""Pipeline stage: build `ctx.doc_comment` from the verbatim nodes."""
	DocumentAssembler(ctx).assemble()
	logger.debug(
		"assembled document: %d params, %d blocks, %d modifiers",
		len(ctx.doc_comment.params),
		sum(1 for _ in ctx.doc_comment.blocks()),
		len(ctx.doc_comment.modifier_tags),
	)
	return True


__all__ = ["DocumentAssembler", "split_paragraphs", "assemble_document"]
