import pytest

from errors import LookupFailed, NotFound
from postprocessing import (
    get_first_feature,
    package_huc,
    pick_huc_field,
    pick_name_field,
    rings_to_polygon,
)


#############################
# 1. Picking the HUC field  #
#############################


def test_pick_huc_field_exact_beats_substring():
    """
    An exact huc<level> key wins even when an earlier key contains "huc".
    """
    attributes = {
        "SourceHucGroup": "upstream",
        "HUC12": "040900050102",
        "GNIS_NAME": "Huron River",
    }
    assert pick_huc_field(attributes, "12") == "HUC12"


@pytest.mark.parametrize("key", ["huc12", "HUC12", "huc_12", "Huc_12"])
def test_pick_huc_field_exact_spellings(key):
    assert pick_huc_field({"OBJECTID": 1, key: "040900050102"}, "12") == key


def test_pick_huc_field_substring_fallback():
    attributes = {"OBJECTID": 1, "AreaSqKm": 88.1, "WatershedHUCCode": "0409"}
    assert pick_huc_field(attributes, "12") == "WatershedHUCCode"


def test_pick_huc_field_wrong_level_falls_back_to_first_huc_key():
    attributes = {"HUC8": "04090005", "HUC12": "040900050102"}
    assert pick_huc_field(attributes, "10") == "HUC8"


def test_pick_huc_field_none():
    assert pick_huc_field({"OBJECTID": 1, "NAME": "x"}, "12") is None
    assert pick_huc_field({}, "12") is None


##############################
# 2. Picking the name field  #
##############################


@pytest.mark.parametrize(
    "key",
    ["NAME", "huc12_name", "HUC12NAME", "GNIS_NAME", "gnisname", "HUC_NAME"],
)
def test_pick_name_field_candidates(key):
    assert pick_name_field({"HUC12": "040900050102", key: "Huron"}, "12") == key


def test_pick_name_field_prefers_earlier_candidate():
    attributes = {"GNIS_NAME": "Huron River (GNIS)", "Name": "Huron River"}
    assert pick_name_field(attributes, "12") == "Name"


def test_pick_name_field_no_substring_fallback():
    attributes = {"HUC12": "040900050102", "StreamName": "Huron"}
    assert pick_name_field(attributes, "12") is None


######################
# 3. Geometry        #
######################


def test_rings_to_polygon_unmodified():
    rings = [[[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]]
    assert rings_to_polygon(rings)[0] == [[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]


def test_rings_to_polygon_keeps_holes_and_winding():
    outer = [[0, 0], [0, 10], [10, 10], [10, 0], [0, 0]]
    hole = [[2, 2], [8, 2], [8, 8], [2, 8], [2, 2]]
    assert rings_to_polygon([outer, hole]) == [outer, hole]


@pytest.mark.parametrize("rings", [None, []])
def test_rings_to_polygon_missing(rings):
    with pytest.raises(LookupFailed):
        rings_to_polygon(rings)


######################
# 4. Packaging       #
######################


def test_get_first_feature():
    data = {"features": [{"attributes": {"HUC12": "a"}}, {"attributes": {"HUC12": "b"}}]}
    assert get_first_feature(data)["attributes"]["HUC12"] == "a"


@pytest.mark.parametrize("data", [{"features": []}, {}, {"features": None}])
def test_get_first_feature_not_found(data):
    with pytest.raises(NotFound):
        get_first_feature(data)


@pytest.mark.parametrize("data", [None, [], "oops", {"error": {"code": 400}}])
def test_get_first_feature_bad_body(data):
    with pytest.raises(LookupFailed):
        get_first_feature(data)


def test_package_huc():
    ring = [[0, 0], [0, 1], [1, 1], [1, 0], [0, 0]]
    feature = {
        "attributes": {"huc_10": 409000501, "Shape_Area": 1.5},
        "geometry": {"rings": [ring]},
    }

    result = package_huc(0.5, 0.5, "10", feature)

    assert result["huc"] == {
        "code": "409000501",
        "extra": {"sourceFields": {"huc_10": 409000501, "Shape_Area": 1.5}},
    }
    assert result["geometry"]["properties"] == {"huc": "409000501", "level": "10"}
    assert result["geometry"]["geometry"]["coordinates"] == [ring]
    assert result["source"]["layer"] == "huc10"


@pytest.mark.parametrize("code", ["", None])
def test_package_huc_empty_code(code):
    feature = {"attributes": {"HUC12": code}, "geometry": {"rings": [[[0, 0]]]}}
    with pytest.raises(NotFound):
        package_huc(0, 0, "12", feature)


def test_package_huc_empty_name_left_unset():
    feature = {
        "attributes": {"HUC12": "040900050102", "NAME": None},
        "geometry": {"rings": [[[0, 0], [0, 1], [1, 1], [0, 0]]]},
    }
    assert "name" not in package_huc(0, 0, "12", feature)["huc"]


def test_package_huc_attributes_not_object():
    feature = {"attributes": ["HUC12", "040900050102"], "geometry": {"rings": [[[0, 0]]]}}
    with pytest.raises(NotFound):
        package_huc(0, 0, "12", feature)


@pytest.mark.parametrize(
    "geometry",
    [[1], "rings", {"rings": [[5]]}, {"rings": [5]}, {"rings": {"0": [[0, 0]]}}],
)
def test_package_huc_malformed_geometry(geometry):
    feature = {"attributes": {"HUC12": "040900050102"}, "geometry": geometry}
    with pytest.raises(LookupFailed):
        package_huc(0, 0, "12", feature)


def test_package_huc_code_checked_before_geometry():
    feature = {"attributes": {"OBJECTID": 3}}
    with pytest.raises(NotFound):
        package_huc(0, 0, "12", feature)
