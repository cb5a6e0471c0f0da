from dataclasses import dataclass
from typing import Union

from .labels import LabelFormatter, default_label_format
from .units import Unit

LAYER_LINE = "controls-layer-line"
SOURCE_LINE = "controls-source-line"
MAIN_COLOR = "#263238"
HALO_COLOR = "#fff"
ALT_COLOR = "#0f0"


@dataclass
class RulerConfig:
    """Configuration for the ruler control."""

    units: Union[Unit, str] = Unit.KILOMETERS
    label_format: LabelFormatter = default_label_format
    main_color: str = MAIN_COLOR
    secondary_color: str = HALO_COLOR
    alt_color: str = ALT_COLOR
    line_width: float = 2.0
    layer_id: str = LAYER_LINE
    source_id: str = SOURCE_LINE

    def __post_init__(self):
        self.units = Unit.parse(self.units)
        if not callable(self.label_format):
            raise ValueError("label_format must be callable")
        if self.line_width <= 0:
            raise ValueError(f"line_width must be positive, got {self.line_width}")
