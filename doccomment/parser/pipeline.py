# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Explicit stage ordering for the doc comment parser.

A pipeline is an ordered tuple of stages; each stage is a function that
reads earlier state from the ParserContext, writes its own field and returns
whether later stages should run. After the last stage the context is
finalized.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from .assembler import assemble_document
from .context import ParserContext
from .line_extractor import extract_lines
from .node_parser import parse_nodes
from .tokenizer import tokenize

logger = logging.getLogger(__name__)

StageFn = Callable[[ParserContext], bool]


@dataclass(frozen=True)
class Stage:
	name: str
	run: StageFn


DEFAULT_STAGES: Tuple[Stage, ...] = (
	Stage("extract_lines", extract_lines),
	Stage("tokenize", tokenize),
	Stage("parse_nodes", parse_nodes),
	Stage("assemble_document", assemble_document),
)


class ParserPipeline:
	def __init__(self, stages: Sequence[Stage] = DEFAULT_STAGES) -> None:
		names = [stage.name for stage in stages]
		if len(set(names)) != len(names):
			raise ValueError(f"duplicate stage names in pipeline: {names}")
		self._stages: Tuple[Stage, ...] = tuple(stages)

	@classmethod
	def default(cls) -> "ParserPipeline":
		return cls(DEFAULT_STAGES)

	@property
	def stages(self) -> Tuple[Stage, ...]:
		return self._stages

	def run(self, ctx: ParserContext) -> ParserContext:
		"""
		Run the stages in order against `ctx`.

		A stage returning False stops the pipeline (e.g. no comment was found);
		the context is returned with whatever diagnostics were recorded. The
		context is finalized only when every stage ran.
		"""
		if ctx.is_finalized:
			raise ValueError("parser context has already been run through a pipeline")
		for stage in self._stages:
			logger.debug("stage %s: start", stage.name)
			if not stage.run(ctx):
				logger.debug("stage %s: stopped pipeline (%d diagnostics)", stage.name, len(ctx.diagnostics))
				return ctx
		ctx.finalize()
		return ctx


__all__ = ["Stage", "StageFn", "DEFAULT_STAGES", "ParserPipeline"]
