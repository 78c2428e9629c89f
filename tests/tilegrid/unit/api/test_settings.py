import pytest

from tilegrid.api.settings import (
    DisplaySettings,
    GridSettings,
    InteractionSettings,
    log_unknown_options,
    normalize_option_name,
)


def test_defaults_match_unbounded_single_cell_grid() -> None:
    settings = GridSettings()
    assert (settings.min_rows, settings.max_rows, settings.min_cols, settings.max_cols) == (1, 0, 1, 0)
    assert settings.fill_max is False
    assert settings.conflict_resolution is None


def test_normalize_option_name() -> None:
    assert normalize_option_name("maxRows") == "max_rows"
    assert normalize_option_name("conflictResolution") == "conflict_resolution"
    assert normalize_option_name("cell_width") == "cell_width"


def test_from_options_ignores_keys_of_other_records() -> None:
    options = {"maxCols": 6, "cellWidth": 12, "resizeUseCallback": True}
    assert GridSettings.from_options(options).max_cols == 6
    assert DisplaySettings.from_options(options).cell_width == 12
    assert InteractionSettings.from_options(options).resize_use_callback is True


def test_negative_bounds_rejected() -> None:
    with pytest.raises(ValueError):
        GridSettings(max_rows=-1)
    with pytest.raises(ValueError):
        InteractionSettings(resize_interval_seconds=0)


def test_unknown_options_logged_at_debug(caplog) -> None:
    caplog.set_level("DEBUG", logger="tilegrid.api.settings")
    log_unknown_options({"maxRows": 2, "colour": "red"}, GridSettings)
    assert "colour" in caplog.text
    assert "maxRows" not in caplog.text
