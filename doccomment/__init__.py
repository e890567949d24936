# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
doccomment: structured documentation comment parser.

Stages (run by `doccomment.parser.pipeline.ParserPipeline`):
  line extraction -> tokenization -> node parsing -> document assembly

All stages share one `doccomment.parser.context.ParserContext` per comment.
The CLI entrypoint is `doccomment.cli:main`.
"""

__all__ = ["core", "nodes", "parser"]
