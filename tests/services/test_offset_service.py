"""Tests for mapoffset.src.services.offset_service.

Exercises the editor-facing entry point: unit conversion, variant/side
checks, attribute derivation and the guarantee that the source feature is
left untouched.
"""

import copy
import logging
import math

import pytest
from shapely.geometry import Polygon

from mapoffset.src.core.errors import FailureKind, OffsetFailure
from mapoffset.src.core.geometry.projection import geodesic_length
from mapoffset.src.models.feature import Feature
from mapoffset.src.models.geometry import LineGeometry, PolygonGeometry, Side
from mapoffset.src.models.offset_config import OffsetConfig
from mapoffset.src.services.offset_service import (
    create_offset_feature,
    is_offsettable,
    offset_side_options,
)

_R = 6378137.0
Y_60N = _R * math.log(math.tan(math.radians(75.0)))


@pytest.fixture
def fence():
    return Feature(
        LineGeometry([(0.0, 0.0), (100.0, 0.0)]),
        {"name": "Fence", "color": "#ff0000", "width": 3},
    )


@pytest.fixture
def lot():
    ring = [(-50.0, -50.0), (50.0, -50.0), (50.0, 50.0), (-50.0, 50.0), (-50.0, -50.0)]
    return Feature(PolygonGeometry([ring]), {"name": "Lot 7", "zoning": "R1"})


# -----------------------------------------------------------------------------
# Geometry
# -----------------------------------------------------------------------------


def test_line_right_at_equator(fence):
    new = create_offset_feature(fence, 10.0, Side.RIGHT)
    assert isinstance(new, Feature)
    coords = new.geometry.coords
    assert coords[0] == pytest.approx((0.0, -10.0), abs=1e-6)
    assert coords[1] == pytest.approx((100.0, -10.0), abs=1e-6)
    assert new.offset_result.applied_projected_distance == pytest.approx(10.0)


def test_side_given_as_string(fence):
    new = create_offset_feature(fence, 10.0, "left")
    assert new.geometry.coords[0] == pytest.approx((0.0, 10.0), abs=1e-6)


def test_distance_scaled_by_latitude():
    line = Feature(LineGeometry([(0.0, Y_60N), (100.0, Y_60N)]))
    new = create_offset_feature(line, 10.0, Side.LEFT)
    assert new.offset_result.applied_projected_distance == pytest.approx(20.0, rel=1e-6)
    assert new.geometry.coords[0][1] - Y_60N == pytest.approx(20.0, rel=1e-6)


def test_polygon_outward_and_inward(lot):
    source_area = Polygon(lot.geometry.exterior).area
    grown = create_offset_feature(lot, 5.0, Side.OUTWARD)
    shrunk = create_offset_feature(lot, 5.0, Side.INWARD)
    assert Polygon(grown.geometry.exterior).area > source_area
    assert Polygon(shrunk.geometry.exterior).area < source_area
    assert grown.geometry.exterior[0] == grown.geometry.exterior[-1]


# -----------------------------------------------------------------------------
# Attributes
# -----------------------------------------------------------------------------


def test_attributes_copied_and_name_suffixed(fence):
    new = create_offset_feature(fence, 10.0, Side.RIGHT)
    assert new.properties == {"name": "Fence (offset)", "color": "#ff0000", "width": 3}
    assert new.id != fence.id


def test_no_name_no_suffix():
    feature = Feature(LineGeometry([(0.0, 0.0), (10.0, 0.0)]), {"kind": "ditch"})
    new = create_offset_feature(feature, 1.0, Side.RIGHT)
    assert "name" not in new.properties
    assert new.properties["kind"] == "ditch"


def test_geometry_property_not_copied():
    feature = Feature(LineGeometry([(0.0, 0.0), (10.0, 0.0)]), {"geometry": "stale", "a": 1})
    new = create_offset_feature(feature, 1.0, Side.RIGHT)
    assert new.properties == {"a": 1}


def test_measure_length_recomputed():
    feature = Feature(
        LineGeometry([(0.0, 0.0), (1000.0, 0.0), (1000.0, 1000.0)]),
        {"name": "Tape", "isMeasure": True, "distance": 1.0},
    )
    new = create_offset_feature(feature, 10.0, Side.LEFT)
    assert new.get("isMeasure") is True
    assert new.get("distance") != 1.0
    assert new.get("distance") == pytest.approx(geodesic_length(new.geometry))


def test_custom_config_keys():
    cfg = OffsetConfig(name_suffix=" copy", measure_flag_key="measure", length_key="len_m")
    feature = Feature(
        LineGeometry([(0.0, 0.0), (500.0, 0.0)]),
        {"name": "A", "measure": 1, "len_m": 0.0},
    )
    new = create_offset_feature(feature, 1.0, Side.RIGHT, cfg)
    assert new.get("name") == "A copy"
    assert new.get("len_m") > 0


def test_source_feature_untouched(lot):
    before = copy.deepcopy(lot.to_dict())
    create_offset_feature(lot, 3.0, Side.OUTWARD)
    create_offset_feature(lot, 3.0, Side.LEFT)
    assert lot.to_dict() == before
    assert lot.offset_result is None


# -----------------------------------------------------------------------------
# Failures
# -----------------------------------------------------------------------------


def test_inward_on_line_rejected(fence):
    result = create_offset_feature(fence, 10.0, Side.INWARD)
    assert isinstance(result, OffsetFailure)
    assert result.kind is FailureKind.INVALID_SIDE
    assert not result


def test_left_on_polygon_rejected(lot):
    result = create_offset_feature(lot, 10.0, "left")
    assert result.kind is FailureKind.INVALID_SIDE


def test_unknown_side_rejected(fence):
    result = create_offset_feature(fence, 10.0, "up")
    assert result.kind is FailureKind.INVALID_SIDE


def test_unsupported_geometry():
    result = create_offset_feature(Feature(None, {"name": "Pin"}), 10.0, Side.LEFT)
    assert result.kind is FailureKind.UNSUPPORTED_GEOMETRY


@pytest.mark.parametrize("distance", [0.0, -5.0, math.nan, math.inf])
def test_invalid_distance(fence, distance):
    result = create_offset_feature(fence, distance, Side.RIGHT)
    assert result.kind is FailureKind.INVALID_DISTANCE


def test_near_pole_degenerate():
    feature = Feature(LineGeometry([(0.0, 1e20), (10.0, 1e20)]))
    result = create_offset_feature(feature, 1.0, Side.RIGHT)
    assert isinstance(result, OffsetFailure)
    assert result.kind is FailureKind.DEGENERATE_INPUT


def test_zero_length_segment_degenerate():
    feature = Feature(LineGeometry([(0.0, 0.0), (5.0, 0.0), (5.0, 0.0), (9.0, 3.0)]))
    result = create_offset_feature(feature, 1.0, Side.RIGHT)
    assert result.kind is FailureKind.DEGENERATE_INPUT


def test_failure_is_logged(fence, caplog):
    with caplog.at_level(logging.WARNING, logger="mapoffset.src.services.offset_service"):
        create_offset_feature(fence, 1.0, Side.OUTWARD)
    assert "invalid_side" in caplog.text


# -----------------------------------------------------------------------------
# Dialog helpers
# -----------------------------------------------------------------------------


def test_side_options(fence, lot):
    assert offset_side_options(fence.geometry) == [(Side.LEFT, "Left"), (Side.RIGHT, "Right")]
    assert offset_side_options(lot.geometry) == [(Side.OUTWARD, "Outward"), (Side.INWARD, "Inward")]


def test_is_offsettable(fence, lot):
    assert is_offsettable(fence)
    assert not is_offsettable(Feature(None))


def test_arrow_line_not_offsettable():
    arrow = Feature(LineGeometry([(0.0, 0.0), (10.0, 0.0)]), {"isArrow": True})
    assert not is_offsettable(arrow)


def test_only_box_and_circle_polygons_offsettable(lot):
    assert not is_offsettable(lot)
    box = Feature(lot.geometry, {"isBox": True})
    circle = Feature(lot.geometry, {"isCircle": True})
    assert is_offsettable(box)
    assert is_offsettable(circle)


def test_offsettable_flag_keys_from_config(lot):
    cfg = OffsetConfig(arrow_flag_key="arrow", offsettable_shape_keys=("shape",))
    assert is_offsettable(Feature(lot.geometry, {"shape": "hexagon"}), cfg)
    assert not is_offsettable(Feature(lot.geometry, {"isBox": True}), cfg)
    line = Feature(LineGeometry([(0.0, 0.0), (10.0, 0.0)]), {"arrow": 1})
    assert not is_offsettable(line, cfg)
