import pytest

from highlight_engine.config import DEFAULT_QUIET_MS, HighlightConfig
from highlight_engine.spans import ColorTag


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("QUIET_MS", "DEFAULT_COLOR", "EOF_PADDING"):
        monkeypatch.delenv(f"HIGHLIGHT_ENGINE_{name}", raising=False)

    config = HighlightConfig.from_env()

    assert config.quiet_ms == DEFAULT_QUIET_MS == 300
    assert config.default_color is ColorTag.RED
    assert config.eof_padding is True


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HIGHLIGHT_ENGINE_QUIET_MS", "120")
    monkeypatch.setenv("HIGHLIGHT_ENGINE_DEFAULT_COLOR", "Orange")
    monkeypatch.setenv("HIGHLIGHT_ENGINE_EOF_PADDING", "off")

    config = HighlightConfig.from_env()

    assert config.quiet_ms == 120
    assert config.default_color is ColorTag.ORANGE
    assert config.eof_padding is False


def test_bad_environment_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HIGHLIGHT_ENGINE_QUIET_MS", "soon")
    monkeypatch.setenv("HIGHLIGHT_ENGINE_DEFAULT_COLOR", "purple")

    config = HighlightConfig.from_env()

    assert config.quiet_ms == DEFAULT_QUIET_MS
    assert config.default_color is ColorTag.RED


def test_negative_quiet_period_rejected() -> None:
    with pytest.raises(ValueError):
        HighlightConfig(quiet_ms=-1)


def test_color_labels_round_trip() -> None:
    assert [tag.label for tag in ColorTag] == [
        "Red",
        "Yellow",
        "Green",
        "Blue",
        "Pink",
        "Orange",
    ]
    assert ColorTag.from_label(" blue ") is ColorTag.BLUE
