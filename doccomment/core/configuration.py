# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser configuration: the tag table and validation switches.

A configuration is immutable once built; `with_tags` returns a new one. The
JSON file format mirrors the usual `tsdoc.json` layout:

  {
    "noStandardTags": false,
    "ignoreUndefinedTags": false,
    "tagDefinitions": [
      {"tagName": "@myTag", "syntaxKind": "block", "allowMultiple": true}
    ]
  }
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional

logger = logging.getLogger(__name__)

# `@` + letter + letters/digits; names are matched case-insensitively.
TAG_NAME_RE = re.compile(r"^@[A-Za-z][A-Za-z0-9]*$")


class ConfigurationError(ValueError):
	"""Raised for malformed tag definitions or configuration files."""


class TagSyntaxKind(Enum):
	"""How a tag is written in a comment."""

	INLINE = "inline"  # {@link Foo}
	BLOCK = "block"  # @remarks followed by content
	MODIFIER = "modifier"  # @public, no content


@dataclass(frozen=True)
class TagDefinition:
	tag_name: str
	syntax_kind: TagSyntaxKind
	allow_multiple: bool = False

	def __post_init__(self) -> None:
		if not TAG_NAME_RE.match(self.tag_name):
			raise ConfigurationError(f"invalid tag name '{self.tag_name}': expected '@' followed by letters/digits")

	@property
	def key(self) -> str:
		return self.tag_name.upper()


STANDARD_TAGS: tuple[TagDefinition, ...] = (
	# Inline tags.
	TagDefinition("@link", TagSyntaxKind.INLINE, allow_multiple=True),
	TagDefinition("@inheritDoc", TagSyntaxKind.INLINE),
	TagDefinition("@label", TagSyntaxKind.INLINE),
	# Block tags.
	TagDefinition("@remarks", TagSyntaxKind.BLOCK),
	TagDefinition("@privateRemarks", TagSyntaxKind.BLOCK),
	TagDefinition("@deprecated", TagSyntaxKind.BLOCK),
	TagDefinition("@returns", TagSyntaxKind.BLOCK),
	TagDefinition("@param", TagSyntaxKind.BLOCK, allow_multiple=True),
	TagDefinition("@typeParam", TagSyntaxKind.BLOCK, allow_multiple=True),
	TagDefinition("@example", TagSyntaxKind.BLOCK, allow_multiple=True),
	TagDefinition("@see", TagSyntaxKind.BLOCK, allow_multiple=True),
	TagDefinition("@throws", TagSyntaxKind.BLOCK, allow_multiple=True),
	TagDefinition("@defaultValue", TagSyntaxKind.BLOCK),
	# Modifier tags.
	TagDefinition("@public", TagSyntaxKind.MODIFIER),
	TagDefinition("@beta", TagSyntaxKind.MODIFIER),
	TagDefinition("@alpha", TagSyntaxKind.MODIFIER),
	TagDefinition("@internal", TagSyntaxKind.MODIFIER),
	TagDefinition("@experimental", TagSyntaxKind.MODIFIER),
	TagDefinition("@readonly", TagSyntaxKind.MODIFIER),
	TagDefinition("@virtual", TagSyntaxKind.MODIFIER),
	TagDefinition("@override", TagSyntaxKind.MODIFIER),
	TagDefinition("@sealed", TagSyntaxKind.MODIFIER),
	TagDefinition("@eventProperty", TagSyntaxKind.MODIFIER),
	TagDefinition("@packageDocumentation", TagSyntaxKind.MODIFIER),
)


@dataclass(frozen=True)
class ParserConfiguration:
	"""Immutable tag table plus validation switches."""

	tags: Mapping[str, TagDefinition] = field(default_factory=dict)
	ignore_undefined_tags: bool = False

	def __post_init__(self) -> None:
		# Copy and freeze whatever mapping the caller passed in.
		object.__setattr__(self, "tags", MappingProxyType(dict(self.tags)))

	@classmethod
	def standard(cls, *, ignore_undefined_tags: bool = False) -> "ParserConfiguration":
		return cls(ignore_undefined_tags=ignore_undefined_tags).with_tags(STANDARD_TAGS)

	def with_tags(self, definitions: Iterable[TagDefinition]) -> "ParserConfiguration":
		"""
		Return a copy with `definitions` added.

		Redefining a tag that is already present (case-insensitive) is a
		configuration error.
		"""
		tags: Dict[str, TagDefinition] = dict(self.tags)
		for definition in definitions:
			if definition.key in tags:
				raise ConfigurationError(f"tag '{definition.tag_name}' is already defined")
			tags[definition.key] = definition
		return replace(self, tags=tags)

	def find_tag(self, tag_name: str) -> Optional[TagDefinition]:
		return self.tags.get(tag_name.upper())

	def is_kind(self, tag_name: str, kind: TagSyntaxKind) -> bool:
		definition = self.find_tag(tag_name)
		return definition is not None and definition.syntax_kind is kind


def _tag_from_json(raw: Any, where: str) -> TagDefinition:
	if not isinstance(raw, dict):
		raise ConfigurationError(f"{where}: tag definition must be an object")
	name = raw.get("tagName")
	if not isinstance(name, str):
		raise ConfigurationError(f"{where}: missing string 'tagName'")
	kind_raw = raw.get("syntaxKind")
	try:
		kind = TagSyntaxKind(kind_raw)
	except ValueError:
		raise ConfigurationError(
			f"{where}: 'syntaxKind' for {name} must be one of inline/block/modifier, got {kind_raw!r}"
		) from None
	allow_multiple = raw.get("allowMultiple", False)
	if not isinstance(allow_multiple, bool):
		raise ConfigurationError(f"{where}: 'allowMultiple' for {name} must be a boolean")
	try:
		return TagDefinition(name, kind, allow_multiple=allow_multiple)
	except ConfigurationError as err:
		raise ConfigurationError(f"{where}: {err}") from None


def configuration_from_json(data: Any, *, source: str = "<config>") -> ParserConfiguration:
	"""Build a ParserConfiguration from decoded JSON."""
	if not isinstance(data, dict):
		raise ConfigurationError(f"{source}: top-level value must be an object")
	no_standard = data.get("noStandardTags", False)
	ignore_undefined = data.get("ignoreUndefinedTags", False)
	for key, value in (("noStandardTags", no_standard), ("ignoreUndefinedTags", ignore_undefined)):
		if not isinstance(value, bool):
			raise ConfigurationError(f"{source}: '{key}' must be a boolean")
	raw_tags = data.get("tagDefinitions", [])
	if not isinstance(raw_tags, list):
		raise ConfigurationError(f"{source}: 'tagDefinitions' must be a list")
	definitions = [_tag_from_json(raw, f"{source}: tagDefinitions[{idx}]") for idx, raw in enumerate(raw_tags)]

	if no_standard:
		base = ParserConfiguration(ignore_undefined_tags=ignore_undefined)
	else:
		base = ParserConfiguration.standard(ignore_undefined_tags=ignore_undefined)
	try:
		return base.with_tags(definitions)
	except ConfigurationError as err:
		raise ConfigurationError(f"{source}: {err}") from None


def load_configuration(path: Path) -> ParserConfiguration:
	"""Load a configuration JSON file."""
	try:
		data = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as err:
		raise ConfigurationError(f"{path}: invalid JSON: {err}") from None
	config = configuration_from_json(data, source=str(path))
	logger.debug("loaded %d tag definitions from %s", len(config.tags), path)
	return config


__all__ = [
	"ConfigurationError",
	"TagSyntaxKind",
	"TagDefinition",
	"STANDARD_TAGS",
	"ParserConfiguration",
	"configuration_from_json",
	"load_configuration",
]
