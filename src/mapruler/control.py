#!/usr/bin/env python3
"""
Ruler control: the measuring session state machine.

The control is attached to a MapSurface. While measuring it listens for
clicks on the surface, drops a draggable handle at each clicked point and
keeps the measurement line and the per-point distance labels up to date.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Union
import logging

from .config import RulerConfig
from .geometry import LngLat
from .labels import Segment, compute_labels, measure_segments
from .surface import (
    CLICK,
    DRAG,
    RULER_BUTTON_CLICK,
    RULER_OFF,
    RULER_ON,
    STYLE_LOAD,
    MapSurface,
    PointHandle,
    geo_line_string,
)
from .units import Unit

logger = logging.getLogger(__name__)

MEASURING_CURSOR = "crosshair"


@dataclass
class MeasurementSession:
    """Index-aligned points, handles and labels of one measuring session."""

    active: bool = False
    points: List[LngLat] = field(default_factory=list)
    handles: List[PointHandle] = field(default_factory=list)
    labels: List[str] = field(default_factory=list)
    drag_listeners: List[Callable[[str, LngLat], None]] = field(default_factory=list)

    def clear(self) -> None:
        self.points = []
        self.handles = []
        self.labels = []
        self.drag_listeners = []

    def check_aligned(self) -> None:
        """
        Raises:
            RuntimeError: If points, handles and labels have drifted apart.
        """
        if not len(self.points) == len(self.handles) == len(self.labels):
            raise RuntimeError(
                f"Session out of step: {len(self.points)} points, "
                f"{len(self.handles)} handles, {len(self.labels)} labels"
            )


class RulerControl:
    """Click-to-measure control for a map surface."""

    def __init__(self, config: Optional[RulerConfig] = None):
        """Initializes a RulerControl.

        Args:
            config: Ruler configuration; defaults to RulerConfig().
        """
        self.config = config if config is not None else RulerConfig()
        self.enabled = True
        self.session = MeasurementSession()
        self._units: Unit = Unit.parse(self.config.units)
        self._surface: Optional[MapSurface] = None

    # Attachment

    @property
    def surface(self) -> Optional[MapSurface]:
        return self._surface

    def on_add(self, surface: MapSurface) -> "RulerControl":
        """Attach the control to a surface."""
        if self._surface is not None and self._surface is not surface:
            self.on_remove()
        self._surface = surface
        logger.debug("Ruler control attached to surface")
        return self

    def on_remove(self) -> None:
        """Stop measuring if needed and detach from the surface."""
        if self._surface is None:
            return
        if self.session.active:
            self.stop()
        self._uninstall_listeners()
        self._surface = None
        logger.debug("Ruler control detached from surface")

    def _require_surface(self) -> MapSurface:
        if self._surface is None:
            raise RuntimeError("Ruler control is not attached to a map surface")
        return self._surface

    # State

    @property
    def measuring(self) -> bool:
        return self.session.active

    @property
    def units(self) -> Unit:
        return self._units

    @property
    def points(self) -> List[LngLat]:
        return list(self.session.points)

    @property
    def handles(self) -> List[PointHandle]:
        return list(self.session.handles)

    @property
    def labels(self) -> List[str]:
        return list(self.session.labels)

    def segments(self) -> List[Segment]:
        """Deltas and running sums of the current points in the current unit."""
        return measure_segments(self.session.points, self._units)

    def set_units(self, units: Union[Unit, str]) -> None:
        """
        Change the display unit.

        Existing labels keep their old unit until the next capture or drag
        recomputes them.
        """
        self._units = Unit.parse(units)
        logger.debug(f"Units set to {self._units}")

    # Lifecycle

    def start(self) -> None:
        """Begin a new measuring session, discarding any current one."""
        surface = self._require_surface()
        if self.session.active:
            logger.debug("Restarting active measuring session")
            self._teardown(surface)

        self.session.active = True
        self.session.clear()
        surface.set_cursor(MEASURING_CURSOR)
        self._draw(surface)
        surface.on(CLICK, self._click_listener)
        surface.on(STYLE_LOAD, self._style_load_listener)
        logger.debug("Measuring started")
        surface.fire(RULER_ON, {"measuring": True})

    def stop(self) -> None:
        """End the measuring session and remove everything it drew."""
        surface = self._surface
        if surface is None:
            self.session.active = False
            self.session.clear()
            return

        surface.set_cursor("")
        if not self.session.active:
            return

        self.session.active = False
        self._teardown(surface)
        logger.debug("Measuring stopped")
        surface.fire(RULER_OFF, {"measuring": False})

    def toggle(self) -> None:
        """Flip the measuring state, as the control button does."""
        if not self.enabled:
            logger.debug("Ignoring toggle on disabled ruler control")
            return
        if self.session.active:
            self.stop()
        else:
            self.start()
        self._require_surface().fire(
            RULER_BUTTON_CLICK, {"measuring": self.session.active}
        )

    def enable(self) -> None:
        self.enabled = True

    def disable(self) -> None:
        self.enabled = False
        self.stop()

    # Inbound events

    def on_capture(self, coordinate: LngLat) -> None:
        """Append a clicked point and drop a handle on it."""
        if not self.session.active:
            logger.debug(f"Ignoring capture at {coordinate} while not measuring")
            return
        surface = self._require_surface()
        coordinate = LngLat(*coordinate)
        session = self.session

        index = len(session.points)
        color = self.config.alt_color if index == 0 else self.config.secondary_color
        handle = surface.add_handle(coordinate, color, self.config.main_color)
        drag_listener = self._make_drag_listener(index, handle)
        handle.on(DRAG, drag_listener)

        session.points.append(coordinate)
        session.handles.append(handle)
        session.drag_listeners.append(drag_listener)
        session.labels = self._compute_labels()
        surface.set_source_data(self.config.source_id, geo_line_string(session.points))

        if index > 0:
            handle.set_popup(session.labels[index])

        session.check_aligned()
        logger.debug(f"Captured point {index} at {coordinate}")

    def on_drag(self, handle_index: int, coordinate: LngLat) -> None:
        """Move one point and relabel the whole measurement."""
        session = self.session
        if not session.active:
            return
        if not 0 <= handle_index < len(session.handles):
            logger.debug(
                f"Ignoring drag of handle {handle_index}; session has {len(session.handles)}"
            )
            return
        surface = self._require_surface()
        coordinate = LngLat(*coordinate)

        session.points[handle_index] = coordinate
        handle = session.handles[handle_index]
        if handle.position != coordinate:
            handle.set_position(coordinate)

        session.labels = self._compute_labels()
        for label, label_handle in zip(session.labels, session.handles):
            if label_handle.popup is not None:
                label_handle.set_popup(label)

        surface.set_source_data(self.config.source_id, geo_line_string(session.points))
        session.check_aligned()

    def on_surface_reload(self) -> None:
        """Redraw the measurement line after the surface rebuilt its style."""
        if self._surface is None or not self.session.active:
            return
        logger.debug("Surface style reloaded; redrawing measurement line")
        self._draw(self._surface)

    # Internals

    def _compute_labels(self) -> List[str]:
        return compute_labels(
            self.session.points, self._units, self.config.label_format
        )

    def _draw(self, surface: MapSurface) -> None:
        config = self.config
        data = geo_line_string(self.session.points)
        if surface.get_source(config.source_id) is None:
            surface.add_source(config.source_id, data)
        else:
            surface.set_source_data(config.source_id, data)
        if surface.get_layer(config.layer_id) is None:
            surface.add_layer(
                {
                    "id": config.layer_id,
                    "type": "line",
                    "source": config.source_id,
                    "paint": {
                        "line-color": config.main_color,
                        "line-width": config.line_width,
                    },
                }
            )

    def _teardown(self, surface: MapSurface) -> None:
        config = self.config
        if surface.get_layer(config.layer_id) is not None:
            surface.remove_layer(config.layer_id)
        if surface.get_source(config.source_id) is not None:
            surface.remove_source(config.source_id)
        for handle, listener in zip(self.session.handles, self.session.drag_listeners):
            handle.off(DRAG, listener)
            handle.remove()
        self.session.clear()
        self._uninstall_listeners()

    def _uninstall_listeners(self) -> None:
        if self._surface is None:
            return
        self._surface.off(CLICK, self._click_listener)
        self._surface.off(STYLE_LOAD, self._style_load_listener)

    def _click_listener(self, event: str, lnglat: LngLat) -> None:
        self.on_capture(lnglat)

    def _style_load_listener(self, event: str, data: Any) -> None:
        self.on_surface_reload()

    def _make_drag_listener(
        self, index: int, handle: PointHandle
    ) -> Callable[[str, LngLat], None]:
        def listener(event: str, lnglat: LngLat) -> None:
            handles = self.session.handles
            # Handles of an earlier session must not move points of this one
            if index < len(handles) and handles[index] is handle:
                self.on_drag(index, lnglat)

        return listener
