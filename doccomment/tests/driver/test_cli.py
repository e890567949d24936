# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from doccomment import cli


def _write(tmp_path: Path, name: str, text: str) -> Path:
	path = tmp_path / name
	path.write_text(text)
	return path


def test_clean_file_prints_outline(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "ok.ts", "/**\n * Adds things.\n * @param a - first\n * @public\n */\n")
	assert cli.main([str(src)]) == 0
	out, err = capsys.readouterr()
	assert err == ""
	assert "Adds things." in out
	assert "@param a: first" in out
	assert "modifiers: @public" in out


def test_diagnostics_go_to_stderr(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	src = _write(tmp_path, "bad.ts", "/** a@b */")
	assert cli.main([str(src)]) == 1
	_out, err = capsys.readouterr()
	assert f"{src}:1:6: error:" in err
	assert '"@" character must be escaped' in err


def test_json_output(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	good = _write(tmp_path, "good.ts", "/** Fine. */")
	bad = _write(tmp_path, "bad.ts", "/** broken")
	assert cli.main([str(good), str(bad), "--json"]) == 1
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == 1
	first, second = payload["files"]
	assert first["file"] == str(good)
	assert first["diagnostics"] == []
	assert first["document"]["summary"]["paragraphs"][0]["nodes"][0]["text"] == "Fine."
	assert [d["message"] for d in second["diagnostics"]] == ["Unexpected end of input"]
	assert second["diagnostics"][0]["line"] == 1


def test_config_file_defines_tags(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(
		tmp_path,
		"tsdoc.json",
		json.dumps({"tagDefinitions": [{"tagName": "@since", "syntaxKind": "block"}]}),
	)
	src = _write(tmp_path, "a.ts", "/** Text. @since 2.0 */")
	assert cli.main([str(src)]) == 1
	capsys.readouterr()
	assert cli.main([str(src), "--config", str(config)]) == 0
	assert "@since: 2.0" in capsys.readouterr().out


def test_bad_config_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	config = _write(tmp_path, "tsdoc.json", json.dumps({"tagDefinitions": "nope"}))
	src = _write(tmp_path, "a.ts", "/** x */")
	assert cli.main([str(src), "--config", str(config)]) == 2
	assert "tagDefinitions" in capsys.readouterr().err


def test_missing_source_exits_2(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
	assert cli.main([str(tmp_path / "nope.ts")]) == 2
	assert "nope.ts" in capsys.readouterr().err
