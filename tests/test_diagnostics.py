from __future__ import annotations

import logging
from pathlib import Path

import pytest

from htmlsmith.core.debug import format_user_friendly_error, record_event
from htmlsmith.core.diagnostics import (
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
    format_event_message,
)
from htmlsmith.core.engines import default_engines
from htmlsmith.core.exceptions import (
    ConfigurationError,
    TemplateCompileError,
    exception_hint,
    exception_messages,
)
from htmlsmith.core.sources import load_template_dir
from htmlsmith.ui.cli.diagnostics import CliEmitter
from htmlsmith.ui.cli.state import CLIState, consume_event_diagnostics


def _raise_nested_compile_error() -> None:
    try:
        raise ValueError("unexpected end of template")
    except ValueError as exc:
        raise TemplateCompileError("Invalid Jinja template 'image.jinja'") from exc


def test_null_emitter_discards_diagnostics(caplog: pytest.LogCaptureFixture) -> None:
    silent = NullEmitter()

    with caplog.at_level(logging.DEBUG):
        silent.warning("unused template")
        silent.error("compile failure", ValueError("bad"))
        silent.event("template_loaded", {"node_type": "paragraph"})

    assert caplog.records == []
    assert isinstance(silent, DiagnosticEmitter)
    assert silent.debug_enabled is False


def test_logging_emitter_uses_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("htmlsmith.tests.render")
    emitter = LoggingEmitter(target, debug_enabled=True)

    with caplog.at_level(logging.WARNING, logger=target.name):
        emitter.error("paragraph.jinja failed", ValueError("unexpected tag"))
        emitter.warning("notes.txt skipped")

    assert [(record.name, record.levelname) for record in caplog.records] == [
        (target.name, "ERROR"),
        (target.name, "WARNING"),
    ]
    assert caplog.records[0].exc_info is not None
    assert emitter.debug_enabled is True


def test_logging_emitter_formats_known_events(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter()
    with caplog.at_level(logging.DEBUG, logger="htmlsmith"):
        emitter.event("template_dir_missing", {"path": "/nowhere"})
        emitter.event("custom", {"flag": True})

    messages = [record.getMessage() for record in caplog.records]
    assert "Template directory not found: /nowhere" in messages
    assert "event custom {'flag': True}" in messages


def test_missing_directory_warning_reaches_logging(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING, logger="htmlsmith"):
        load_template_dir(
            tmp_path / "missing", default_engines(), emitter=LoggingEmitter(), warn_on_skip=True
        )

    assert any("Template directory not found" in record.message for record in caplog.records)


def test_format_event_message() -> None:
    assert (
        format_event_message(
            "template_loaded", {"node_type": "image", "path": "t/image.jinja", "engine": "jinja"}
        )
        == "Loaded template 'image' from t/image.jinja (jinja)"
    )
    assert (
        format_event_message("template_skipped", {"path": "t/notes.txt", "reason": "no engine"})
        == "Skipping t/notes.txt: no engine"
    )
    assert (
        format_event_message("chains_built", {"sources": 2, "node_types": ["image"]})
        == "Resolved 1 templated node type(s) from 2 source(s)"
    )
    assert format_event_message("unknown", {}) is None


def test_record_event_accepts_missing_emitter() -> None:
    record_event(None, "template_loaded", {"node_type": "image"})


def test_cli_emitter_prints_problems_and_keeps_events(capsys: pytest.CaptureFixture[str]) -> None:
    state = CLIState(verbosity=1)
    emitter = CliEmitter(state=state)

    emitter.warning("notes.txt has no engine")
    emitter.error("image.jinja does not compile")
    emitter.event("template_dir_missing", {"path": "/nowhere"})
    emitter.event("custom", {})

    stderr = capsys.readouterr().err
    assert "warning: notes.txt has no engine" in stderr
    assert "error: image.jinja does not compile" in stderr
    assert "/nowhere" not in stderr
    assert consume_event_diagnostics(state) == ["Template directory not found: /nowhere"]
    assert state.events == []


def test_exception_messages_follow_the_cause_chain() -> None:
    with pytest.raises(TemplateCompileError) as excinfo:
        _raise_nested_compile_error()

    assert exception_messages(excinfo.value) == [
        "Invalid Jinja template 'image.jinja'",
        "unexpected end of template",
    ]
    assert exception_hint(excinfo.value) == "unexpected end of template"


def test_format_user_friendly_error_reports_root_cause() -> None:
    with pytest.raises(TemplateCompileError) as excinfo:
        _raise_nested_compile_error()

    message = format_user_friendly_error(excinfo.value)

    assert message.startswith("Configuration failed: unexpected end of template")
    assert "--debug" in message


def test_format_user_friendly_error_for_render_failures() -> None:
    message = format_user_friendly_error(TypeError("returned int, expected str."))

    assert message == (
        "Rendering failed: returned int, expected str. Re-run with --debug for technical details."
    )
    assert format_user_friendly_error(ConfigurationError("")).startswith("Configuration failed.")
