"""
tests/test_generator.py
Tests for the generation pipeline (proptypegen.generator) and the CLI
entry point (proptypegen.cli).

Run with:
    pytest tests/ -v
"""

from __future__ import annotations

import json
import pathlib
from typing import Any, Dict

import pytest
import yaml

from proptypegen import __version__
from proptypegen.cli import (
    EXIT_EXPORT_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    cli_main,
)
from proptypegen.generator import (
    STDOUT_PATH,
    GenerationReport,
    PropTypesGenerator,
    load_graph_file,
    parse_raw_graph,
)
from proptypegen.models import GenerationConfig, TypeGraph


def _write_yaml(path: pathlib.Path, data: Dict[str, Any]) -> pathlib.Path:
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False, sort_keys=False)
    return path


# ---------------------------------------------------------------------------
# Loading & parsing
# ---------------------------------------------------------------------------


class TestLoadGraphFile:
    def test_yaml(self, example_yaml_path: pathlib.Path, example_dict: Dict[str, Any]) -> None:
        assert load_graph_file(example_yaml_path) == example_dict

    def test_json(self, example_json_path: pathlib.Path, example_dict: Dict[str, Any]) -> None:
        assert load_graph_file(example_json_path) == example_dict

    def test_unknown_extension_falls_back_to_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "graph.txt"
        path.write_text("top_levels:\n  S: {kind: string}\n", encoding="utf-8")
        assert load_graph_file(path) == {"top_levels": {"S": {"kind": "string"}}}

    def test_missing_file(self, tmp_path: pathlib.Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_graph_file(tmp_path / "nope.yaml")

    def test_invalid_json(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_graph_file(path)

    def test_non_mapping_yaml(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="Expected a YAML mapping"):
            load_graph_file(path)


class TestParseRawGraph:
    def test_graph_key(self, example_dict: Dict[str, Any]) -> None:
        graph, config = parse_raw_graph(example_dict)
        assert isinstance(graph, TypeGraph)
        assert config.indent_size == 4

    def test_type_graph_key(self, minimal_graph_dict: Dict[str, Any]) -> None:
        graph, config = parse_raw_graph({"type_graph": minimal_graph_dict})
        assert graph.object_count == 1
        assert config == GenerationConfig()

    def test_graph_at_top_level(self, minimal_graph_dict: Dict[str, Any]) -> None:
        raw = dict(minimal_graph_dict, config={"acronym_style": "original"})
        graph, config = parse_raw_graph(raw)
        assert list(graph.top_levels) == ["User"]
        assert config.acronym_style == "original"

    def test_missing_graph(self) -> None:
        with pytest.raises(ValueError, match="Cannot find a type graph"):
            parse_raw_graph({"config": {}})

    def test_invalid_graph(self, minimal_graph_dict: Dict[str, Any]) -> None:
        minimal_graph_dict["top_levels"]["X"] = {"kind": "object", "ref": "missing"}
        with pytest.raises(ValueError, match="Type graph validation failed"):
            parse_raw_graph({"graph": minimal_graph_dict})

    def test_invalid_config(self, minimal_graph_dict: Dict[str, Any]) -> None:
        with pytest.raises(ValueError, match="Config validation failed"):
            parse_raw_graph({"graph": minimal_graph_dict, "config": {"indent_size": 40}})


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class TestPropTypesGenerator:
    def test_generate_in_memory(self, example_graph: TypeGraph, example_output: str) -> None:
        report = PropTypesGenerator().generate(example_graph)
        assert report.success
        assert report.output is not None
        assert report.output.content == example_output
        assert report.output_path == STDOUT_PATH
        assert report.written is False
        assert [s.step_name for s in report.step_metrics] == [
            "Validate Type Graph",
            "Render PropTypes",
        ]

    def test_generate_from_file_to_disk(
        self, example_yaml_path: pathlib.Path, tmp_path: pathlib.Path, example_output: str
    ) -> None:
        target = tmp_path / "out" / "propTypes.js"
        report = PropTypesGenerator().generate_from_file(
            example_yaml_path, config_overrides={"output_path": str(target)}
        )
        assert report.success, report.summary()
        assert report.written
        assert target.read_text(encoding="utf-8") == example_output
        assert report.step_metrics[-1].step_name == "Export to Filesystem"

    def test_refuses_to_overwrite(
        self, example_graph: TypeGraph, tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "propTypes.js"
        target.write_text("keep me", encoding="utf-8")
        report = PropTypesGenerator().generate(
            example_graph, GenerationConfig(output_path=str(target))
        )
        assert not report.success
        assert report.export_errors
        assert target.read_text(encoding="utf-8") == "keep me"

    def test_overwrite_existing(
        self, example_graph: TypeGraph, tmp_path: pathlib.Path, example_output: str
    ) -> None:
        target = tmp_path / "propTypes.js"
        target.write_text("old", encoding="utf-8")
        report = PropTypesGenerator().generate(
            example_graph,
            GenerationConfig(output_path=str(target), overwrite_existing=True),
        )
        assert report.success
        assert target.read_text(encoding="utf-8") == example_output

    def test_dry_run_writes_nothing(
        self, example_graph: TypeGraph, tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "propTypes.js"
        report = PropTypesGenerator(dry_run=True).generate(
            example_graph, GenerationConfig(output_path=str(target))
        )
        assert report.success
        assert report.output is not None
        assert not report.written
        assert not target.exists()

    def test_fail_on_warnings(
        self, unreachable_graph_dict: Dict[str, Any], tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "propTypes.js"
        report = PropTypesGenerator(fail_on_warnings=True).generate(
            TypeGraph.model_validate(unreachable_graph_dict),
            GenerationConfig(output_path=str(target)),
        )
        assert not report.success
        assert report.validation_warnings
        assert report.validation_errors
        assert report.output is None
        assert not target.exists()

    def test_warnings_alone_do_not_fail(self, unreachable_graph_dict: Dict[str, Any]) -> None:
        report = PropTypesGenerator().generate(TypeGraph.model_validate(unreachable_graph_dict))
        assert report.success
        assert len(report.validation_warnings) == 1
        assert report.output is not None
        assert "let _Orphan;" in report.output.content

    def test_load_failure_is_an_input_error(self, tmp_path: pathlib.Path) -> None:
        report = PropTypesGenerator().generate_from_file(tmp_path / "missing.yaml")
        assert not report.success
        assert report.input_errors
        assert report.step_metrics[0].success is False

    def test_config_overrides_win(
        self, example_yaml_path: pathlib.Path
    ) -> None:
        report = PropTypesGenerator().generate_from_file(
            example_yaml_path, config_overrides={"leading_comments": ["Hello"]}
        )
        assert report.output is not None
        assert report.output.content.startswith("// Hello\n")

    def test_summary(self, example_graph: TypeGraph) -> None:
        report: GenerationReport = PropTypesGenerator().generate(example_graph)
        text = report.summary()
        assert "SUCCESS" in text
        assert "Render PropTypes" in text


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCli:
    def _run(self, *argv: str) -> int:
        with pytest.raises(SystemExit) as exc_info:
            cli_main(list(argv))
        return exc_info.value.code

    def test_renders_to_stdout(
        self, example_yaml_path: pathlib.Path, example_output: str, capsys: pytest.CaptureFixture
    ) -> None:
        assert self._run("-g", str(example_yaml_path), "-q") == EXIT_SUCCESS
        assert capsys.readouterr().out == example_output

    def test_summary_goes_to_stderr_with_stdout_output(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture
    ) -> None:
        assert self._run("-g", str(example_yaml_path)) == EXIT_SUCCESS
        captured = capsys.readouterr()
        assert "Generation Report" in captured.err
        assert "Generation Report" not in captured.out

    def test_writes_output_file(
        self, example_yaml_path: pathlib.Path, tmp_path: pathlib.Path, example_output: str
    ) -> None:
        target = tmp_path / "propTypes.js"
        assert self._run("-g", str(example_yaml_path), "-o", str(target), "-q") == EXIT_SUCCESS
        assert target.read_text(encoding="utf-8") == example_output

    def test_existing_output_needs_force(
        self, example_yaml_path: pathlib.Path, tmp_path: pathlib.Path
    ) -> None:
        target = tmp_path / "propTypes.js"
        target.write_text("", encoding="utf-8")
        args = ("-g", str(example_yaml_path), "-o", str(target), "-q")
        assert self._run(*args) == EXIT_EXPORT_ERROR
        assert self._run(*args, "--force") == EXIT_SUCCESS

    def test_overrides(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture
    ) -> None:
        code = self._run(
            "-g", str(example_yaml_path), "-q",
            "--leading-comment", "One", "--leading-comment", "Two",
        )
        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out.startswith("// One\n// Two\n\nimport")

    def test_dry_run_prints_instead_of_writing(
        self,
        example_yaml_path: pathlib.Path,
        tmp_path: pathlib.Path,
        example_output: str,
        capsys: pytest.CaptureFixture,
    ) -> None:
        target = tmp_path / "propTypes.js"
        code = self._run("-g", str(example_yaml_path), "-o", str(target), "--dry-run", "-q")
        assert code == EXIT_SUCCESS
        assert capsys.readouterr().out == example_output
        assert not target.exists()

    def test_missing_graph_file(self, tmp_path: pathlib.Path) -> None:
        assert self._run("-g", str(tmp_path / "none.yaml"), "-q") == EXIT_INPUT_ERROR

    def test_unparseable_graph(self, tmp_path: pathlib.Path) -> None:
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"top_levels": {}}), encoding="utf-8")
        assert self._run("-g", str(path), "-q") == EXIT_INPUT_ERROR

    def test_validate_only(
        self, example_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture
    ) -> None:
        assert self._run("-g", str(example_yaml_path), "--validate-only") == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert "Type Graph Validation Report" in out
        assert "import PropTypes" not in out

    def test_fail_on_warnings(
        self, unreachable_graph_dict: Dict[str, Any], tmp_path: pathlib.Path
    ) -> None:
        path = _write_yaml(tmp_path / "graph.yaml", {"graph": unreachable_graph_dict})
        assert self._run("-g", str(path), "-q") == EXIT_SUCCESS
        assert self._run("-g", str(path), "-q", "--fail-on-warnings") == EXIT_VALIDATION_ERROR
        assert self._run(
            "-g", str(path), "-q", "--fail-on-warnings", "--validate-only"
        ) == EXIT_VALIDATION_ERROR

    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        assert self._run("--version") == 0
        assert __version__ in capsys.readouterr().out
