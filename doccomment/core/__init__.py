# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
doccomment.core: shared types used across parser stages.

Modules:
  - span: immutable source span over a text buffer
  - diagnostics: message + span records collected during parsing
  - configuration: tag definitions and parser options
"""

__all__ = [
	"span",
	"diagnostics",
	"configuration",
]
