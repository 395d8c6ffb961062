import pytest

from format_engine.buffer import Position, Selection
from format_engine.runtime import telemetry
from format_engine.runtime.telemetry import Event, format_field, phase, record_event
from format_engine.session import FormatStatus


def test_format_field_renders_buffer_coordinates() -> None:
    assert format_field(Position(1, 6)) == "1:6"
    assert format_field(Selection.cursor(2, 0)) == "2:0"
    assert format_field(Selection(Position(0, 4), Position(1, 8))) == "0:4-1:8"
    assert format_field((Selection.cursor(0, 0), Selection.cursor(1, 1))) == "0:0,1:1"
    assert format_field(FormatStatus.NO_CHANGE_NEEDED) == "no_change_needed"
    assert format_field(3) == "3"


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.build_config("verbose")
    with pytest.raises(ValueError):
        telemetry.configure("quiet", config=telemetry.build_config())


def test_phase_reraises_and_keeps_annotations() -> None:
    with pytest.raises(KeyError):
        with phase("session", "compose", logger_name="tests.telemetry") as handle:
            handle.annotate("delta", 2)
            raise KeyError("boom")

    assert handle.name == "session::compose"
    assert handle.results == {"delta": 2}


def test_events_accept_structured_fields() -> None:
    record_event(
        Event.SELECTION_DROPPED,
        level="warning",
        logger_name="tests.telemetry",
        selection=Selection.cursor(7, 0),
        reason="Line out of range",
    )
