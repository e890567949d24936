# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line front end: parse doc comments from files and report diagnostics.

Each input file is treated as one comment (leading whitespace before `/**`
is allowed). Exit status: 0 when no diagnostics were recorded, 1 when any
file produced diagnostics, 2 for configuration or I/O errors.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from doccomment.core.configuration import ConfigurationError, ParserConfiguration, load_configuration
from doccomment.core.diagnostics import diagnostic_to_json
from doccomment.nodes import doc_comment_to_json, render_text
from doccomment.parser import DocCommentParser, ParserContext

logger = logging.getLogger(__name__)


def _summarize(ctx: ParserContext) -> str:
	"""Short human-readable outline of the assembled document."""
	doc = ctx.doc_comment
	out: List[str] = []
	summary = "\n\n".join(render_text(p.nodes) for p in doc.summary_section.paragraphs)
	if summary:
		out.append(summary)
	for block in doc.blocks():
		text = " ".join(render_text(p.nodes).replace("\n", " ") for p in block.content.paragraphs)
		name = getattr(block, "parameter_name", "")
		head = f"{block.tag_name} {name}".rstrip()
		out.append(f"{head}: {text}" if text else head)
	if len(doc.modifier_tags):
		out.append("modifiers: " + " ".join(tag.tag_name for tag in doc.modifier_tags))
	return "\n".join(out)


def _file_result(path: Path, ctx: ParserContext) -> Dict[str, Any]:
	return {
		"file": str(path),
		"diagnostics": [diagnostic_to_json(d, str(path)) for d in ctx.diagnostics],
		"document": doc_comment_to_json(ctx.doc_comment),
	}


def main(argv: list[str] | None = None) -> int:
	"""
	Parse each source file and print its diagnostics.

	With --json, prints {"exit_code", "files": [{"file", "diagnostics",
	"document"}]}; otherwise prints `file:line:col: severity: message` lines to
	stderr and a document outline to stdout.
	"""
	parser = argparse.ArgumentParser(description="Parse /** ... */ documentation comments")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to files containing one doc comment each")
	parser.add_argument("--config", type=Path, help="Tag configuration JSON (tsdoc.json layout)")
	parser.add_argument(
		"--json",
		action="store_true",
		help="Emit diagnostics and documents as JSON",
	)
	parser.add_argument("-v", "--verbose", action="store_true", help="Log parser stages at DEBUG level")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)

	try:
		config = load_configuration(args.config) if args.config else ParserConfiguration.standard()
	except (ConfigurationError, OSError) as err:
		print(f"error: {err}", file=sys.stderr)
		return 2

	doc_parser = DocCommentParser(config)
	results: List[Dict[str, Any]] = []
	exit_code = 0
	for path in args.source:
		try:
			text = path.read_text(encoding="utf-8")
		except OSError as err:
			print(f"{path}:?:?: error: {err}", file=sys.stderr)
			return 2
		ctx = doc_parser.parse_string(text)
		logger.debug("%s: %d diagnostics", path, len(ctx.diagnostics))
		if ctx.diagnostics:
			exit_code = 1
		if args.json:
			results.append(_file_result(path, ctx))
			continue
		for d in ctx.diagnostics:
			print(f"{path}:{d.line}:{d.column}: {d.severity}: {d.message}", file=sys.stderr)
		outline = _summarize(ctx)
		if outline:
			print(outline)

	if args.json:
		print(json.dumps({"exit_code": exit_code, "files": results}))
	return exit_code


__all__ = ["main"]
