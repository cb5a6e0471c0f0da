#!/usr/bin/env python3
"""
Interfaces the ruler expects from a host map surface.

A surface owns named GeoJSON sources, line layers that draw them, and
draggable point handles. It also fires the host notifications the ruler
listens to:

- ``click`` with the clicked LngLat
- ``style.load`` after the surface dropped and rebuilt its style

Handles fire ``drag`` with their new LngLat.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Sequence

from .events import EventEmitter
from .geometry import LngLat

CLICK = "click"
STYLE_LOAD = "style.load"
DRAG = "drag"

RULER_ON = "ruler.on"
RULER_OFF = "ruler.off"
RULER_BUTTON_CLICK = "ruler.buttonclick"


def geo_line_string(coordinates: Sequence[LngLat] = ()) -> Dict[str, Any]:
    """Build a GeoJSON LineString feature from measurement points."""
    return {
        "type": "Feature",
        "properties": {},
        "geometry": {
            "type": "LineString",
            "coordinates": [LngLat(*c).to_list() for c in coordinates],
        },
    }


class PointHandle(EventEmitter, ABC):
    """A draggable marker bound to one measurement point."""

    @property
    @abstractmethod
    def position(self) -> LngLat:
        """Current position of the handle."""

    @abstractmethod
    def set_position(self, position: LngLat) -> None:
        """Move the handle."""

    @property
    @abstractmethod
    def popup(self) -> Optional[str]:
        """HTML of the attached popup, or None if no popup is attached."""

    @abstractmethod
    def set_popup(self, html: str) -> None:
        """Attach a popup if needed and set its HTML."""

    @property
    @abstractmethod
    def removed(self) -> bool:
        """Whether the handle has been removed from its surface."""

    @abstractmethod
    def remove(self) -> None:
        """Remove the handle from its surface. Removing twice is harmless."""


class MapSurface(EventEmitter, ABC):
    """A map that can draw the measurement line and host point handles."""

    @abstractmethod
    def add_source(self, source_id: str, data: Dict[str, Any]) -> None:
        """Register a GeoJSON source."""

    @abstractmethod
    def get_source(self, source_id: str) -> Optional[Dict[str, Any]]:
        """Return the data of a source, or None if it does not exist."""

    @abstractmethod
    def set_source_data(self, source_id: str, data: Dict[str, Any]) -> None:
        """Replace the data of an existing source."""

    @abstractmethod
    def remove_source(self, source_id: str) -> None:
        """Remove a source."""

    @abstractmethod
    def add_layer(self, layer: Dict[str, Any]) -> None:
        """Add a styled layer; ``layer["source"]`` names the source it draws."""

    @abstractmethod
    def get_layer(self, layer_id: str) -> Optional[Dict[str, Any]]:
        """Return a layer definition, or None if it does not exist."""

    @abstractmethod
    def remove_layer(self, layer_id: str) -> None:
        """Remove a layer."""

    @abstractmethod
    def add_handle(
        self, position: LngLat, color: str, border_color: str
    ) -> PointHandle:
        """Create a draggable handle at position."""

    @abstractmethod
    def set_cursor(self, cursor: str) -> None:
        """Set the pointer affordance; an empty string restores the default."""

    @abstractmethod
    def get_cursor(self) -> str:
        """Return the current pointer affordance."""
