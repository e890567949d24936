# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Doc comment node family.

Leaf nodes (`PlainText`, `SoftBreak`, `EscapedText`, `CodeSpan`, `InlineTag`,
`BlockTag`, `ErrorText`) are produced by the node parser and each carries the
span of the source it was recognized from; the parser context keeps them in
its verbatim-node list. Container nodes (`Paragraph`, `Section`, `Block`,
`ParamBlock`, `ModifierTagSet`, `DocComment`) are built by the assembler.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, ClassVar, Dict, Iterator, List, Optional, TYPE_CHECKING

from doccomment.core.span import Span

if TYPE_CHECKING:
	from doccomment.parser.context import ParserContext


class DocNodeKind(Enum):
	PLAIN_TEXT = auto()
	SOFT_BREAK = auto()
	ESCAPED_TEXT = auto()
	CODE_SPAN = auto()
	INLINE_TAG = auto()
	BLOCK_TAG = auto()
	ERROR_TEXT = auto()
	PARAGRAPH = auto()
	SECTION = auto()
	BLOCK = auto()
	PARAM_BLOCK = auto()
	MODIFIER_TAG_SET = auto()
	COMMENT = auto()


class DocNode:
	"""Base class of every node; `kind` identifies the variant."""

	kind: ClassVar[DocNodeKind]


# ---------------------------------------------------------------------------
# Leaf (verbatim) nodes
# ---------------------------------------------------------------------------


@dataclass
class PlainText(DocNode):
	kind: ClassVar[DocNodeKind] = DocNodeKind.PLAIN_TEXT
	span: Span
	text: str

	def is_whitespace(self) -> bool:
		return not self.text.strip()


@dataclass
class SoftBreak(DocNode):
	"""End of a content line (zero-width span at the line end)."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.SOFT_BREAK
	span: Span


@dataclass
class EscapedText(DocNode):
	"""A backslash escape; `text` is the escaped character without the backslash."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.ESCAPED_TEXT
	span: Span
	text: str


@dataclass
class CodeSpan(DocNode):
	kind: ClassVar[DocNodeKind] = DocNodeKind.CODE_SPAN
	span: Span
	code: str


@dataclass
class InlineTag(DocNode):
	"""`{@tagName content}`; `content` is the raw text between name and brace."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.INLINE_TAG
	span: Span
	tag_name: str
	content: str = ""


@dataclass
class BlockTag(DocNode):
	"""`@tagName` starting a block, or a modifier tag."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.BLOCK_TAG
	span: Span
	tag_name: str


@dataclass
class ErrorText(DocNode):
	"""Text that could not be parsed; a diagnostic is recorded alongside it."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.ERROR_TEXT
	span: Span
	text: str
	message: str


LEAF_NODE_TYPES = (PlainText, SoftBreak, EscapedText, CodeSpan, InlineTag, BlockTag, ErrorText)


# ---------------------------------------------------------------------------
# Containers
# ---------------------------------------------------------------------------


@dataclass
class Paragraph(DocNode):
	kind: ClassVar[DocNodeKind] = DocNodeKind.PARAGRAPH
	nodes: List[DocNode] = field(default_factory=list)


@dataclass
class Section(DocNode):
	"""
	Ordered run of leaf nodes.

	The assembler appends leaves to `nodes` and then groups them into
	`paragraphs` (see `doccomment.parser.assembler.split_paragraphs`).
	"""

	kind: ClassVar[DocNodeKind] = DocNodeKind.SECTION
	nodes: List[DocNode] = field(default_factory=list)
	paragraphs: List[Paragraph] = field(default_factory=list)

	def append(self, node: DocNode) -> None:
		self.nodes.append(node)


@dataclass
class Block(DocNode):
	kind: ClassVar[DocNodeKind] = DocNodeKind.BLOCK
	block_tag: BlockTag
	content: Section = field(default_factory=Section)

	@property
	def tag_name(self) -> str:
		return self.block_tag.tag_name


@dataclass
class ParamBlock(Block):
	"""`@param` / `@typeParam` block; `parameter_name` is empty when missing."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.PARAM_BLOCK
	parameter_name: str = ""


@dataclass
class ModifierTagSet(DocNode):
	"""Modifier tags (e.g. `@public`) promoted out of the comment body."""

	kind: ClassVar[DocNodeKind] = DocNodeKind.MODIFIER_TAG_SET
	nodes: List[BlockTag] = field(default_factory=list)

	def add(self, tag: BlockTag) -> bool:
		"""Add `tag`; returns False (and keeps the first) when already present."""
		if self.has_tag(tag.tag_name):
			return False
		self.nodes.append(tag)
		return True

	def has_tag(self, tag_name: str) -> bool:
		key = tag_name.upper()
		return any(node.tag_name.upper() == key for node in self.nodes)

	def __iter__(self) -> Iterator[BlockTag]:
		return iter(self.nodes)

	def __len__(self) -> int:
		return len(self.nodes)

	def is_public(self) -> bool:
		return self.has_tag("@public")

	def is_beta(self) -> bool:
		return self.has_tag("@beta")

	def is_internal(self) -> bool:
		return self.has_tag("@internal")


class DocComment(DocNode):
	"""
	The parsed comment; primary output of the parser.

	Created empty by the ParserContext constructor and filled in by the
	assembler. The back-reference to the context is a weak reference: the
	context owns the document, never the other way around, so
	`parser_context` returns None once the context has been discarded.
	"""

	kind: ClassVar[DocNodeKind] = DocNodeKind.COMMENT

	def __init__(self, *, parser_context: "ParserContext") -> None:
		self._parser_context_ref = weakref.ref(parser_context)
		self.summary_section = Section()
		self.remarks_block: Optional[Block] = None
		self.private_remarks: Optional[Block] = None
		self.deprecated_block: Optional[Block] = None
		self.returns_block: Optional[Block] = None
		self.params: List[ParamBlock] = []
		self.type_params: List[ParamBlock] = []
		self.see_blocks: List[Block] = []
		self.custom_blocks: List[Block] = []
		self.modifier_tags = ModifierTagSet()
		self.inherit_doc_tag: Optional[InlineTag] = None

	@property
	def parser_context(self) -> Optional["ParserContext"]:
		return self._parser_context_ref()

	def find_param(self, name: str) -> Optional[ParamBlock]:
		for block in self.params:
			if block.parameter_name == name:
				return block
		return None

	def sections(self) -> Iterator[Section]:
		"""Every section in document order (summary first)."""
		yield self.summary_section
		for block in self.blocks():
			yield block.content

	def blocks(self) -> Iterator[Block]:
		for block in (self.remarks_block, self.private_remarks, self.deprecated_block):
			if block is not None:
				yield block
		yield from self.params
		yield from self.type_params
		if self.returns_block is not None:
			yield self.returns_block
		yield from self.see_blocks
		yield from self.custom_blocks


# ---------------------------------------------------------------------------
# Rendering helpers (JSON-friendly dumps for the CLI and tests)
# ---------------------------------------------------------------------------


def node_to_json(node: DocNode) -> Dict[str, Any]:
	if isinstance(node, PlainText):
		return {"kind": "PlainText", "text": node.text}
	if isinstance(node, SoftBreak):
		return {"kind": "SoftBreak"}
	if isinstance(node, EscapedText):
		return {"kind": "EscapedText", "text": node.text}
	if isinstance(node, CodeSpan):
		return {"kind": "CodeSpan", "code": node.code}
	if isinstance(node, InlineTag):
		return {"kind": "InlineTag", "tagName": node.tag_name, "content": node.content}
	if isinstance(node, BlockTag):
		return {"kind": "BlockTag", "tagName": node.tag_name}
	if isinstance(node, ErrorText):
		return {"kind": "ErrorText", "text": node.text, "message": node.message}
	if isinstance(node, Paragraph):
		return {"kind": "Paragraph", "nodes": [node_to_json(n) for n in node.nodes]}
	if isinstance(node, Section):
		return {"kind": "Section", "paragraphs": [node_to_json(p) for p in node.paragraphs]}
	if isinstance(node, ParamBlock):
		return {
			"kind": "ParamBlock",
			"tagName": node.tag_name,
			"parameterName": node.parameter_name,
			"content": node_to_json(node.content),
		}
	if isinstance(node, Block):
		return {"kind": "Block", "tagName": node.tag_name, "content": node_to_json(node.content)}
	if isinstance(node, ModifierTagSet):
		return {"kind": "ModifierTagSet", "tags": [tag.tag_name for tag in node.nodes]}
	if isinstance(node, DocComment):
		return doc_comment_to_json(node)
	raise TypeError(f"unsupported node type {type(node).__name__}")


def doc_comment_to_json(doc: DocComment) -> Dict[str, Any]:
	def _opt(block: Optional[Block]) -> Optional[Dict[str, Any]]:
		return node_to_json(block) if block is not None else None

	return {
		"summary": node_to_json(doc.summary_section),
		"remarks": _opt(doc.remarks_block),
		"privateRemarks": _opt(doc.private_remarks),
		"deprecated": _opt(doc.deprecated_block),
		"params": [node_to_json(b) for b in doc.params],
		"typeParams": [node_to_json(b) for b in doc.type_params],
		"returns": _opt(doc.returns_block),
		"see": [node_to_json(b) for b in doc.see_blocks],
		"customBlocks": [node_to_json(b) for b in doc.custom_blocks],
		"modifiers": [tag.tag_name for tag in doc.modifier_tags],
		"inheritDoc": node_to_json(doc.inherit_doc_tag) if doc.inherit_doc_tag is not None else None,
	}


def render_text(nodes: List[DocNode]) -> str:
	"""Plain-text rendering of leaf nodes (soft breaks become newlines)."""
	parts: List[str] = []
	for node in nodes:
		if isinstance(node, (PlainText, EscapedText, ErrorText)):
			parts.append(node.text)
		elif isinstance(node, SoftBreak):
			parts.append("\n")
		elif isinstance(node, CodeSpan):
			parts.append(f"`{node.code}`")
		elif isinstance(node, InlineTag):
			parts.append(f"{{{node.tag_name} {node.content}}}" if node.content else f"{{{node.tag_name}}}")
		elif isinstance(node, BlockTag):
			parts.append(node.tag_name)
	return "".join(parts)


__all__ = [
	"DocNodeKind",
	"DocNode",
	"PlainText",
	"SoftBreak",
	"EscapedText",
	"CodeSpan",
	"InlineTag",
	"BlockTag",
	"ErrorText",
	"LEAF_NODE_TYPES",
	"Paragraph",
	"Section",
	"Block",
	"ParamBlock",
	"ModifierTagSet",
	"DocComment",
	"node_to_json",
	"doc_comment_to_json",
	"render_text",
]
