# File: proptypegen/generator.py
"""
PropTypeGen - Generation Pipeline (Orchestrator)
=================================================

Connects every phase together:

    Graph Input → Validation → Rendering → File Export

Workflow::

    1. Load the type graph from a JSON/YAML file (or accept in-memory models).
    2. Parse into ``TypeGraph`` + ``GenerationConfig`` (models.py).
    3. Run the semantic validation pipeline (validators.py).
    4. Render the PropTypes module (renderer.py).
    5. Write it to ``config.output_path`` (or keep it in the report).
    6. Return a ``GenerationReport`` with metrics and status.

Error handling strategy:
    - Each step records its failure in the report instead of raising.
    - Rendering is all-or-nothing: a failed render writes no file.
    - The final report gives a clear pass/fail verdict.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import ValidationError as PydanticValidationError

from proptypegen.models import GeneratedFile, GenerationConfig, TypeGraph
from proptypegen.naming import NamingError
from proptypegen.renderer import PropTypesRenderer
from proptypegen.synthesizer import InternalConsistencyError
from proptypegen.utils import Timer, write_file
from proptypegen.validators import ValidationResult, validate_full

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("proptypegen.generator")

STDOUT_PATH: str = "<stdout>"


# ---------------------------------------------------------------------------
# Generation report
# ---------------------------------------------------------------------------


@dataclass(frozen=False, slots=True)
class GenerationStepMetric:
    """Timing and outcome for a single pipeline step."""

    step_name: str = ""
    success: bool = True
    elapsed_seconds: float = 0.0
    detail: str = ""


@dataclass(frozen=False, slots=True)
class GenerationReport:
    """
    Report produced by ``PropTypesGenerator.generate()``.

    Contains timing information, the generated file (if any), validation
    results and any errors encountered.
    """

    success: bool = False
    output_path: str = ""
    written: bool = False

    total_elapsed_seconds: float = 0.0

    step_metrics: List[GenerationStepMetric] = field(default_factory=list)
    input_errors: List[str] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    generation_errors: List[str] = field(default_factory=list)
    export_errors: List[str] = field(default_factory=list)

    output: Optional[GeneratedFile] = None

    def summary(self) -> str:
        """Return a human-readable summary string."""
        lines: List[str] = []
        status: str = "✅ SUCCESS" if self.success else "❌ FAILED"
        lines.append(f"{'='*60}")
        lines.append("  PropTypeGen — Generation Report")
        lines.append(f"{'='*60}")
        lines.append(f"  Status:           {status}")
        lines.append(f"  Output:           {self.output_path or '-'}")
        if self.output is not None:
            lines.append(f"  Lines:            {self.output.line_count:,}")
            lines.append(f"  Bytes:            {self.output.size_bytes:,}")
        lines.append(f"  Written:          {'yes' if self.written else 'no'}")
        lines.append(f"  Total time:       {self.total_elapsed_seconds:.3f}s")
        lines.append(f"{'─'*60}")

        if self.step_metrics:
            lines.append("  Pipeline Steps:")
            for step in self.step_metrics:
                icon: str = "✓" if step.success else "✗"
                lines.append(
                    f"    {icon} {step.step_name:<28s} "
                    f"{step.elapsed_seconds:>7.3f}s  "
                    f"{step.detail}"
                )

        sections: List[Tuple[str, List[str], str]] = [
            ("Input Errors", self.input_errors, "✗"),
            ("Validation Errors", self.validation_errors, "✗"),
            ("Validation Warnings", self.validation_warnings, "⚠"),
            ("Generation Errors", self.generation_errors, "✗"),
            ("Export Errors", self.export_errors, "✗"),
        ]
        for title, items, icon in sections:
            if not items:
                continue
            lines.append(f"{'─'*60}")
            lines.append(f"  {title} ({len(items)}):")
            for item in items:
                lines.append(f"    {icon} {item}")

        lines.append(f"{'='*60}")
        return "\n".join(lines)


# ---------------------------------------------------------------------------
# Graph loader helpers
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_graph_file(path: Path) -> Dict[str, Any]:
    """
    Load a type graph file (JSON or YAML), dispatching on extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")

    if not path.is_file():
        raise ValueError(f"Graph path is not a file: {path}")

    suffix: str = path.suffix.lower()

    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    elif suffix == ".json":
        return _load_json_file(path)
    else:
        logger.info("Unknown extension '%s' — trying JSON then YAML.", suffix)
        try:
            return _load_json_file(path)
        except ValueError:
            return _load_yaml_file(path)


def parse_raw_graph(raw: Dict[str, Any]) -> Tuple[TypeGraph, GenerationConfig]:
    """
    Parse a raw dictionary (from JSON/YAML) into validated Pydantic models.

    Accepted layouts:
        - the graph under ``"graph"`` or ``"type_graph"``;
        - the graph keys (``objects``, ``enums``, ``top_levels``) at top level.
    An optional ``"config"`` mapping holds ``GenerationConfig`` settings.

    Raises:
        ValueError: If the graph is missing or fails model validation.
    """
    graph_data: Optional[Dict[str, Any]] = None
    for key in ("graph", "type_graph"):
        if isinstance(raw.get(key), dict):
            graph_data = raw[key]
            break

    if graph_data is None:
        if "top_levels" not in raw:
            raise ValueError(
                "Cannot find a type graph in input. Expected a 'graph' or "
                "'type_graph' mapping, or a top-level 'top_levels' key."
            )
        graph_data = {k: v for k, v in raw.items() if k != "config"}

    config_data: Dict[str, Any] = raw.get("config") or {}
    if not config_data:
        logger.info("No generation config found in input — using defaults.")

    try:
        graph: TypeGraph = TypeGraph.model_validate(graph_data)
    except PydanticValidationError as exc:
        raise ValueError(f"Type graph validation failed: {exc}") from exc

    try:
        config: GenerationConfig = GenerationConfig.model_validate(config_data)
    except PydanticValidationError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc

    return graph, config


# ---------------------------------------------------------------------------
# PropTypesGenerator: orchestrator
# ---------------------------------------------------------------------------


class PropTypesGenerator:
    """
    Pipeline orchestrator.

    Usage::

        generator = PropTypesGenerator()

        # From a file
        report = generator.generate_from_file(Path("graph.yaml"))

        # From in-memory objects
        report = generator.generate(graph, GenerationConfig(output_path="out.js"))

        print(report.summary())

    The generator is reusable; every call renders with a fresh namer.
    """

    def __init__(
        self,
        *,
        strict_validation: bool = True,
        fail_on_warnings: bool = False,
        dry_run: bool = False,
    ) -> None:
        """
        Args:
            strict_validation: If True, abort on any validation error.
            fail_on_warnings: If True, treat validation warnings as errors.
            dry_run: If True, render but never write to disk.
        """
        self._strict_validation: bool = strict_validation
        self._fail_on_warnings: bool = fail_on_warnings
        self._dry_run: bool = dry_run

        logger.debug(
            "PropTypesGenerator initialised: strict=%s, fail_on_warnings=%s, dry_run=%s.",
            strict_validation,
            fail_on_warnings,
            dry_run,
        )

    # -----------------------------------------------------------------
    # Public: generate from file
    # -----------------------------------------------------------------

    def generate_from_file(
        self,
        graph_path: Path,
        *,
        config_overrides: Optional[Dict[str, Any]] = None,
    ) -> GenerationReport:
        """Full pipeline: load file → validate → render → export."""
        report: GenerationReport = GenerationReport()
        pipeline_start: float = time.perf_counter()

        with Timer("load_graph") as t_load:
            try:
                raw_data: Dict[str, Any] = load_graph_file(graph_path)
                if config_overrides:
                    raw_data["config"] = {
                        **(raw_data.get("config") or {}),
                        **config_overrides,
                    }
                graph, config = parse_raw_graph(raw_data)
            except (FileNotFoundError, ValueError) as exc:
                load_error: Optional[str] = str(exc)
            else:
                load_error = None

        report.step_metrics.append(GenerationStepMetric(
            step_name="Load Type Graph",
            success=load_error is None,
            elapsed_seconds=t_load.elapsed,
            detail=load_error or f"from {graph_path.name}",
        ))
        if load_error is not None:
            logger.error("Failed to load type graph: %s", load_error)
            report.input_errors.append(load_error)
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        logger.info("Loaded %r from %s.", graph, graph_path)
        return self._run_pipeline(graph, config, report, pipeline_start)

    # -----------------------------------------------------------------
    # Public: generate from in-memory objects
    # -----------------------------------------------------------------

    def generate(
        self,
        graph: TypeGraph,
        config: Optional[GenerationConfig] = None,
    ) -> GenerationReport:
        """Full pipeline from a pre-parsed graph and config."""
        report: GenerationReport = GenerationReport()
        return self._run_pipeline(
            graph, config or GenerationConfig(), report, time.perf_counter()
        )

    # -----------------------------------------------------------------
    # Internal: master pipeline
    # -----------------------------------------------------------------

    def _run_pipeline(
        self,
        graph: TypeGraph,
        config: GenerationConfig,
        report: GenerationReport,
        pipeline_start: float,
    ) -> GenerationReport:
        report.output_path = config.output_path or STDOUT_PATH

        validation_ok: bool = self._step_validate(graph, config, report)
        if not validation_ok and self._strict_validation:
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        content: Optional[str] = self._step_render(graph, config, report)
        if content is None:
            return self._finalise_report(report, time.perf_counter() - pipeline_start)

        report.output = GeneratedFile(path=report.output_path, content=content)

        if config.output_path is not None and not self._dry_run:
            self._step_export(content, config, report)

        return self._finalise_report(report, time.perf_counter() - pipeline_start)

    def _step_validate(
        self,
        graph: TypeGraph,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> bool:
        """Returns True if validation passed."""
        with Timer("validation") as t:
            result: ValidationResult = validate_full(graph, config)

        report.validation_errors.extend(str(e) for e in result.errors)
        report.validation_warnings.extend(str(w) for w in result.warnings)

        if result.has_errors:
            detail: str = f"{result.error_count} error(s)"
        elif result.has_warnings:
            detail = f"{result.warning_count} warning(s)"
        else:
            detail = "all checks passed"

        passed: bool = result.is_valid and not (
            self._fail_on_warnings and result.has_warnings
        )
        report.step_metrics.append(GenerationStepMetric(
            step_name="Validate Type Graph",
            success=passed,
            elapsed_seconds=t.elapsed,
            detail=detail,
        ))

        for warn in result.warnings:
            logger.warning("  ⚠ %s", warn)
        for err in result.errors:
            logger.error("  ✗ %s", err)

        if passed:
            return True
        if self._fail_on_warnings and result.has_warnings and not result.has_errors:
            report.validation_errors.append(
                f"{result.warning_count} warning(s) treated as errors."
            )
        return False

    def _step_render(
        self,
        graph: TypeGraph,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> Optional[str]:
        """Render the module. Returns None if the pass aborted."""
        with Timer("render") as t:
            try:
                content: Optional[str] = PropTypesRenderer(graph, config).render()
                error: Optional[str] = None
            except (InternalConsistencyError, NamingError) as exc:
                content = None
                error = f"{type(exc).__name__}: {exc}"

        if error is not None:
            report.generation_errors.append(error)
            logger.error("Rendering aborted: %s", error)

        report.step_metrics.append(GenerationStepMetric(
            step_name="Render PropTypes",
            success=error is None,
            elapsed_seconds=t.elapsed,
            detail=error or f"{graph.object_count} objects, {graph.enum_count} enums",
        ))
        return content

    def _step_export(
        self,
        content: str,
        config: GenerationConfig,
        report: GenerationReport,
    ) -> None:
        """Write the rendered module to ``config.output_path``."""
        path: Path = Path(config.output_path)
        with Timer("export") as t:
            if path.exists() and not config.overwrite_existing:
                error: Optional[str] = (
                    f"Output file already exists: {path} (enable overwrite_existing)."
                )
                byte_count: int = 0
            else:
                try:
                    byte_count = write_file(path, content)
                    error = None
                except OSError as exc:
                    byte_count = 0
                    error = f"Failed to write {path}: {exc}"

        if error is not None:
            report.export_errors.append(error)
            logger.error(error)
        else:
            report.written = True
            logger.info("Wrote %d bytes to %s.", byte_count, path)

        report.step_metrics.append(GenerationStepMetric(
            step_name="Export to Filesystem",
            success=error is None,
            elapsed_seconds=t.elapsed,
            detail=error or f"{byte_count:,} bytes",
        ))

    def _finalise_report(
        self,
        report: GenerationReport,
        total_elapsed: float,
    ) -> GenerationReport:
        """Set final status and timing on the report."""
        report.total_elapsed_seconds = total_elapsed
        report.success = not (
            report.input_errors
            or report.validation_errors
            or report.generation_errors
            or report.export_errors
        )
        return report


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "PropTypesGenerator",
    "GenerationReport",
    "GenerationStepMetric",
    "load_graph_file",
    "parse_raw_graph",
    "STDOUT_PATH",
]

logger.debug("proptypegen.generator loaded.")
