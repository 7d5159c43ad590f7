"""Unit tests for deterministic phase log formatting."""

from __future__ import annotations

import io

from textquote.telemetry.logger import RunLogger


def test_run_logger_emits_sorted_sanitized_context() -> None:
    """Phase lines should carry stage, event, and sorted shell-safe context."""

    sink = io.StringIO()
    run_logger = RunLogger(sink=sink)

    run_logger.log_stage_start("calculate")
    run_logger.log_stage_complete("input", reused_blocks=2, note="two words")
    run_logger.log_stage_failure("config", "CommandStageError")

    assert sink.getvalue().splitlines() == [
        "[phase] level=INFO stage=calculate event=start",
        "[phase] level=INFO stage=input event=complete note=two_words reused_blocks=2",
        "[phase] level=ERROR stage=config event=failure error_type=CommandStageError",
    ]


def test_run_logger_disabled_emits_nothing() -> None:
    """A disabled logger should not write to its sink."""

    sink = io.StringIO()
    run_logger = RunLogger(sink=sink, enabled=False)

    run_logger.log_stage_start("calculate")
    run_logger.log_stage_failure("calculate", "ValueError")

    assert sink.getvalue() == ""
