import io

import pytest
import gpxpy.gpx
from mapruler.geometry import LngLat
from mapruler.gpx import load_points, points_from_gpx

HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">'


class TestPointsFromGpx:

    def test_tracks_and_segments_are_concatenated(self):
        data = HEADER + """
          <trk>
            <trkseg><trkpt lat="1" lon="2"></trkpt><trkpt lat="3" lon="4"></trkpt></trkseg>
            <trkseg><trkpt lat="5" lon="6"></trkpt></trkseg>
          </trk>
          <trk><trkseg><trkpt lat="7" lon="8"></trkpt></trkseg></trk>
        </gpx>"""

        points = points_from_gpx(io.StringIO(data))

        assert points == [LngLat(2, 1), LngLat(4, 3), LngLat(6, 5), LngLat(8, 7)]

    def test_route_points_used_without_tracks(self):
        data = HEADER + """
          <rte><rtept lat="1" lon="2"></rtept><rtept lat="3" lon="4"></rtept></rte>
        </gpx>"""

        assert points_from_gpx(io.StringIO(data)) == [LngLat(2, 1), LngLat(4, 3)]

    def test_waypoints_used_as_last_resort(self):
        data = HEADER + """
          <wpt lat="1" lon="2"></wpt>
        </gpx>"""

        assert points_from_gpx(io.StringIO(data)) == [LngLat(2, 1)]

    def test_empty_gpx(self):
        assert points_from_gpx(io.StringIO(HEADER + "</gpx>")) == []

    def test_malformed(self):
        with pytest.raises(gpxpy.gpx.GPXException):
            points_from_gpx(io.StringIO("not xml at all"))


def test_load_points_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_points(str(tmp_path / "nope.gpx"))
