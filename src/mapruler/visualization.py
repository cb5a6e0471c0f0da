#!/usr/bin/env python3
"""
Map surface backed by folium.

FoliumSurface keeps the ruler's sources, layers and handles in memory and
renders them to a standalone Leaflet page on demand.
"""

from typing import Any, Dict, List, Optional
import copy
import logging
import folium
from folium.template import Template

from .geometry import LngLat
from .surface import CLICK, DRAG, STYLE_LOAD, MapSurface, PointHandle

logger = logging.getLogger(__name__)

HANDLE_SIZE = 12


class RulerLegend(folium.MacroElement):
    """Fixed legend summarizing the measurement."""

    def __init__(self, point_count: int, total_label: str):
        super().__init__()
        self.point_count = point_count
        self.total_label = total_label

        self._template = Template(
            """
        {% macro html(this, kwargs) %}
        <div id="ruler-legend" style="
            position: fixed;
            bottom: 50px;
            left: 50px;
            width: 200px;
            background-color: white;
            border: 2px solid grey;
            z-index: 9999;
            font-size: 13px;
            padding: 12px;
            font-family: Arial, sans-serif;
            border-radius: 5px;
            box-shadow: 0 2px 5px rgba(0,0,0,0.2);
            box-sizing: border-box;
        ">
            <b>Measurement</b><br>
            <div style="margin: 4px 0; line-height: 1.3;">
                Points: {{ this.point_count }}
            </div>
            {% if this.total_label %}
            <div style="margin: 4px 0; line-height: 1.3;">
                Total: {{ this.total_label }}
            </div>
            {% endif %}
        </div>
        {% endmacro %}
        """
        )


def handle_icon_html(color: str, border_color: str) -> str:
    """Inline HTML for a round handle marker."""
    return (
        f'<div style="width: {HANDLE_SIZE}px; height: {HANDLE_SIZE}px; '
        f"border-radius: 50%; background: {color}; box-sizing: border-box; "
        f'border: 2px solid {border_color};"></div>'
    )


class FoliumHandle(PointHandle):
    """In-memory point handle rendered as a draggable folium Marker."""

    def __init__(self, position: LngLat, color: str, border_color: str):
        super().__init__()
        self._position = LngLat(*position)
        self.color = color
        self.border_color = border_color
        self._popup: Optional[str] = None
        self._removed = False

    @property
    def position(self) -> LngLat:
        return self._position

    def set_position(self, position: LngLat) -> None:
        self._position = LngLat(*position)

    @property
    def popup(self) -> Optional[str]:
        return self._popup

    def set_popup(self, html: str) -> None:
        self._popup = html

    @property
    def removed(self) -> bool:
        return self._removed

    def remove(self) -> None:
        self._removed = True

    def drag_to(self, position: LngLat) -> None:
        """Simulate the user dragging this handle to position."""
        self.set_position(position)
        self.fire(DRAG, self._position)


class FoliumSurface(MapSurface):
    """MapSurface that records state and renders it with folium."""

    def __init__(self) -> None:
        super().__init__()
        self.sources: Dict[str, Dict[str, Any]] = {}
        self.layers: Dict[str, Dict[str, Any]] = {}
        self.handles: List[FoliumHandle] = []
        self.cursor = ""

    # Sources and layers

    def add_source(self, source_id: str, data: Dict[str, Any]) -> None:
        if source_id in self.sources:
            raise ValueError(f"Source {source_id!r} already exists")
        self.sources[source_id] = copy.deepcopy(data)

    def get_source(self, source_id: str) -> Optional[Dict[str, Any]]:
        return self.sources.get(source_id)

    def set_source_data(self, source_id: str, data: Dict[str, Any]) -> None:
        if source_id not in self.sources:
            raise KeyError(f"No source named {source_id!r}")
        self.sources[source_id] = copy.deepcopy(data)

    def remove_source(self, source_id: str) -> None:
        for layer in self.layers.values():
            if layer.get("source") == source_id:
                raise ValueError(
                    f"Source {source_id!r} is still used by layer {layer['id']!r}"
                )
        del self.sources[source_id]

    def add_layer(self, layer: Dict[str, Any]) -> None:
        layer_id = layer["id"]
        if layer_id in self.layers:
            raise ValueError(f"Layer {layer_id!r} already exists")
        if layer.get("source") not in self.sources:
            raise KeyError(f"Layer {layer_id!r} refers to unknown source")
        self.layers[layer_id] = copy.deepcopy(layer)

    def get_layer(self, layer_id: str) -> Optional[Dict[str, Any]]:
        return self.layers.get(layer_id)

    def remove_layer(self, layer_id: str) -> None:
        del self.layers[layer_id]

    # Handles and cursor

    def add_handle(
        self, position: LngLat, color: str, border_color: str
    ) -> FoliumHandle:
        handle = FoliumHandle(position, color, border_color)
        self.handles.append(handle)
        return handle

    def live_handles(self) -> List[FoliumHandle]:
        return [h for h in self.handles if not h.removed]

    def set_cursor(self, cursor: str) -> None:
        self.cursor = cursor

    def get_cursor(self) -> str:
        return self.cursor

    # Simulated user interaction

    def click(self, lnglat: LngLat) -> None:
        """Simulate a click on the map at lnglat."""
        self.fire(CLICK, LngLat(*lnglat))

    def reload_style(self) -> None:
        """Simulate a style reload, which drops every custom source and layer."""
        logger.debug(
            f"Reloading style; dropping {len(self.layers)} layers and {len(self.sources)} sources"
        )
        self.layers.clear()
        self.sources.clear()
        self.fire(STYLE_LOAD)

    # Rendering

    def _bounds(self) -> Optional[List[List[float]]]:
        positions = [h.position for h in self.live_handles()]
        for layer in self.layers.values():
            source = self.sources.get(layer["source"], {})
            for lon, lat in source.get("geometry", {}).get("coordinates", []):
                positions.append(LngLat(lon, lat))
        if not positions:
            return None
        south = min(p.latitude for p in positions)
        north = max(p.latitude for p in positions)
        west = min(p.longitude for p in positions)
        east = max(p.longitude for p in positions)
        return [[south, west], [north, east]]

    def build_map(self, total_label: str = "") -> folium.Map:
        """
        Build a folium map showing every line layer and live handle.

        Args:
            total_label: Text for the legend's total line; omitted if empty

        Returns:
            The folium.Map
        """
        bounds = self._bounds()
        if bounds is not None:
            (south, west), (north, east) = bounds
            center = [(south + north) / 2, (west + east) / 2]
        else:
            center = [0.0, 0.0]

        logger.debug(f"Creating map centered at ({center[0]:.4f}, {center[1]:.4f})")

        ruler_map = folium.Map(location=center, tiles=None)

        folium.TileLayer(
            tiles="CartoDB positron",
            attr=(
                "&copy; <a href='https://www.openstreetmap.org/copyright'>OpenStreetMap</a> "
                "contributors &copy; <a href='https://carto.com/attributions'>CARTO</a>"
            ),
            name="Standard",
            control=True,
            show=True,
        ).add_to(ruler_map)

        folium.TileLayer(
            tiles="https://server.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
            attr=(
                "Tiles &copy; Esri &mdash; Source: Esri, i-cubed, USDA, USGS, AEX, GeoEye, "
                "Getmapping, Aerogrid, IGN, IGP, UPR-EGP, and the GIS User Community"
            ),
            name="Satellite",
            control=True,
            show=False,
        ).add_to(ruler_map)

        folium.LayerControl().add_to(ruler_map)

        for layer in self.layers.values():
            if layer.get("type") != "line":
                continue
            source = self.sources.get(layer["source"])
            if source is None:
                continue
            # GeoJSON is lon/lat; folium wants lat/lon
            coordinates = [
                [lat, lon] for lon, lat in source["geometry"]["coordinates"]
            ]
            if len(coordinates) < 2:
                continue
            paint = layer.get("paint", {})
            folium.PolyLine(
                coordinates,
                color=paint.get("line-color"),
                weight=paint.get("line-width"),
                z_index=1,
            ).add_to(ruler_map)

        for handle in self.live_handles():
            popup = None
            if handle.popup is not None:
                popup = folium.Popup(handle.popup, show=True, max_width=200)
            folium.Marker(
                [handle.position.latitude, handle.position.longitude],
                icon=folium.DivIcon(
                    html=handle_icon_html(handle.color, handle.border_color),
                    icon_size=(HANDLE_SIZE, HANDLE_SIZE),
                    icon_anchor=(HANDLE_SIZE // 2, HANDLE_SIZE // 2),
                ),
                popup=popup,
                draggable=True,
            ).add_to(ruler_map)

        ruler_map.add_child(RulerLegend(len(self.live_handles()), total_label))

        if bounds is not None:
            ruler_map.fit_bounds(bounds)

        return ruler_map

    def save(self, output_filename: str, total_label: str = "") -> None:
        """Render the map and save it as HTML."""
        self.build_map(total_label).save(output_filename)
        logger.debug(
            f"Map saved to {output_filename} with {len(self.live_handles())} handles"
        )
