# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from doccomment.core.configuration import (
	ConfigurationError,
	ParserConfiguration,
	TagDefinition,
	TagSyntaxKind,
	configuration_from_json,
	load_configuration,
)


def test_standard_tags_by_kind() -> None:
	config = ParserConfiguration.standard()
	assert config.is_kind("@param", TagSyntaxKind.BLOCK)
	assert config.is_kind("@public", TagSyntaxKind.MODIFIER)
	assert config.is_kind("@link", TagSyntaxKind.INLINE)
	assert config.find_tag("@nope") is None


def test_tag_lookup_is_case_insensitive() -> None:
	config = ParserConfiguration.standard()
	definition = config.find_tag("@TYPEPARAM")
	assert definition is not None
	assert definition.tag_name == "@typeParam"


def test_with_tags_returns_new_configuration() -> None:
	base = ParserConfiguration.standard()
	extended = base.with_tags([TagDefinition("@myTag", TagSyntaxKind.BLOCK)])
	assert extended.find_tag("@myTag") is not None
	assert base.find_tag("@myTag") is None


def test_redefining_a_tag_is_rejected() -> None:
	with pytest.raises(ConfigurationError, match="already defined"):
		ParserConfiguration.standard().with_tags([TagDefinition("@Remarks", TagSyntaxKind.BLOCK)])


def test_tag_table_is_read_only() -> None:
	config = ParserConfiguration.standard()
	with pytest.raises(TypeError):
		config.tags["@X"] = TagDefinition("@x", TagSyntaxKind.BLOCK)  # type: ignore[index]


def test_bare_configuration_table_is_read_only() -> None:
	config = ParserConfiguration()
	with pytest.raises(TypeError):
		config.tags["@SINCE"] = TagDefinition("@since", TagSyntaxKind.BLOCK)  # type: ignore[index]
	assert config.find_tag("@since") is None


def test_caller_mapping_is_copied() -> None:
	table = {"@SINCE": TagDefinition("@since", TagSyntaxKind.BLOCK)}
	config = ParserConfiguration(tags=table)
	table["@EXTRA"] = TagDefinition("@extra", TagSyntaxKind.BLOCK)
	assert config.find_tag("@since") is not None
	assert config.find_tag("@extra") is None


@pytest.mark.parametrize("name", ["param", "@", "@1abc", "@has-dash"])
def test_invalid_tag_names(name: str) -> None:
	with pytest.raises(ConfigurationError, match="invalid tag name"):
		TagDefinition(name, TagSyntaxKind.BLOCK)


def test_load_configuration_file(tmp_path: Path) -> None:
	path = tmp_path / "tsdoc.json"
	path.write_text(
		json.dumps(
			{
				"ignoreUndefinedTags": True,
				"tagDefinitions": [{"tagName": "@myTag", "syntaxKind": "modifier"}],
			}
		)
	)
	config = load_configuration(path)
	assert config.ignore_undefined_tags is True
	assert config.is_kind("@myTag", TagSyntaxKind.MODIFIER)
	assert config.find_tag("@remarks") is not None


def test_no_standard_tags() -> None:
	config = configuration_from_json(
		{"noStandardTags": True, "tagDefinitions": [{"tagName": "@only", "syntaxKind": "block", "allowMultiple": True}]}
	)
	assert list(config.tags) == ["@ONLY"]
	definition = config.find_tag("@only")
	assert definition is not None and definition.allow_multiple


def test_bad_syntax_kind_mentions_location() -> None:
	with pytest.raises(ConfigurationError, match=r"tagDefinitions\[0\].*syntaxKind"):
		configuration_from_json({"tagDefinitions": [{"tagName": "@x", "syntaxKind": "weird"}]}, source="cfg.json")


def test_bad_tag_name_in_file_mentions_location() -> None:
	with pytest.raises(ConfigurationError, match=r"cfg.json: tagDefinitions\[1\]"):
		configuration_from_json(
			{
				"tagDefinitions": [
					{"tagName": "@ok", "syntaxKind": "block"},
					{"tagName": "nope", "syntaxKind": "block"},
				]
			},
			source="cfg.json",
		)


def test_non_boolean_switch_rejected() -> None:
	with pytest.raises(ConfigurationError, match="ignoreUndefinedTags"):
		configuration_from_json({"ignoreUndefinedTags": "yes"})


def test_invalid_json_file(tmp_path: Path) -> None:
	path = tmp_path / "broken.json"
	path.write_text("{not json")
	with pytest.raises(ConfigurationError, match="invalid JSON"):
		load_configuration(path)
