import pytest
from mapruler.config import LAYER_LINE, SOURCE_LINE, RulerConfig
from mapruler.labels import default_label_format, total_label_format
from mapruler.units import Unit


def test_defaults():
    config = RulerConfig()

    assert config.units is Unit.KILOMETERS
    assert config.label_format is default_label_format
    assert config.main_color == "#263238"
    assert config.secondary_color == "#fff"
    assert config.alt_color == "#0f0"
    assert config.line_width == 2.0
    assert config.layer_id == LAYER_LINE
    assert config.source_id == SOURCE_LINE


def test_units_given_as_symbol_are_normalized():
    assert RulerConfig(units="nmi").units is Unit.NAUTICAL_MILES


def test_custom_formatter():
    config = RulerConfig(label_format=total_label_format)
    assert config.label_format(1.0, 2.0, config.units) == "2.00 km"


def test_unknown_units_fail_fast():
    with pytest.raises(ValueError, match="Unknown unit"):
        RulerConfig(units="furlongs")


def test_non_callable_formatter_rejected():
    with pytest.raises(ValueError, match="callable"):
        RulerConfig(label_format="+ {delta}")


def test_non_positive_line_width_rejected():
    with pytest.raises(ValueError, match="line_width"):
        RulerConfig(line_width=0)
