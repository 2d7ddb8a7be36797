import pytest

from vipix.runtime import telemetry


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.build_config("loud")


def test_loggers_are_cached_per_name() -> None:
    assert telemetry.get_logger("vipix.test") is telemetry.get_logger("vipix.test")


def test_configure_uses_environment_preset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIPIX_LOG_PRESET", "nope")

    with pytest.raises(ValueError):
        telemetry.configure()

    telemetry.configure(preset="quiet")


def test_span_collects_metadata_and_reraises() -> None:
    with telemetry.span("test::ok", component=True, metadata={"cells": {(1, 0)}}) as handle:
        handle.add_metadata("visited", 2)
        telemetry.record_event("test.event", level="debug", data={"cursor": (0, 0)})

    assert handle.metadata == {"cells": "[(1, 0)]", "visited": "2"}

    with pytest.raises(KeyError):
        with telemetry.span("test::boom"):
            raise KeyError("x")
