"""
Normalize ArcGIS WBD query results into the HUC lookup response.

WBD attribute names depend on the provider and layer (HUC12, huc_12,
SourceHucGroup, GNIS_NAME, Name, ...), so fields are picked out of the
attribute map by rule instead of by fixed name.
"""

from config import HUC_SOURCE_PROVIDER
from errors import LookupFailed, NotFound
from luts import huc_name_fields


def pick_huc_field(attributes, level):
    """Find the attribute holding the HUC code.

    An exact, case-insensitive match on `huc<level>` or `huc_<level>` wins;
    otherwise the first key containing "huc" is used.

    Args:
        attributes (dict): ArcGIS feature attributes
        level (str): HUC level, e.g. "12"

    Returns:
        str: the matching key, or None
    """
    level = level.lower()
    exact = (f"huc{level}", f"huc_{level}")
    for key in attributes:
        if key.lower() in exact:
            return key
    for key in attributes:
        if "huc" in key.lower():
            return key
    return None


def pick_name_field(attributes, level):
    """Find the attribute holding the HUC name, by preference order.

    Args:
        attributes (dict): ArcGIS feature attributes
        level (str): HUC level, e.g. "12"

    Returns:
        str: the matching key, or None
    """
    keys_by_lower = {}
    for key in attributes:
        keys_by_lower.setdefault(key.lower(), key)
    for candidate in huc_name_fields(level.lower()):
        if candidate in keys_by_lower:
            return keys_by_lower[candidate]
    return None


def attribute_str(attributes, key):
    """String value of an attribute, "" when the key or value is missing."""
    if key is None or attributes.get(key) is None:
        return ""
    return str(attributes[key])


def rings_to_polygon(rings):
    """Convert ArcGIS polygon rings to GeoJSON Polygon coordinates.

    Ring 0 is the outer boundary and later rings are holes. Coordinate order
    and winding are kept exactly as received.

    Args:
        rings (list): list of closed rings of [x, y] pairs

    Returns:
        list: GeoJSON Polygon coordinates

    Raises:
        LookupFailed: when there is no ring data to draw, or it is malformed
    """
    if not rings:
        raise LookupFailed("Matched feature has no ring geometry")
    if not isinstance(rings, list):
        raise LookupFailed("Feature rings are not a list")
    for ring in rings:
        if not isinstance(ring, list) or not all(
            isinstance(point, list) for point in ring
        ):
            raise LookupFailed(f"Malformed ring in feature geometry: {ring!r}")
    return [[list(point) for point in ring] for ring in rings]


def get_first_feature(data):
    """Pick the feature to report out of an ArcGIS query response.

    Only the first feature is used; HUC boundaries at one level do not overlap.

    Args:
        data (dict): decoded ArcGIS query response

    Returns:
        dict: the first feature

    Raises:
        LookupFailed: when the body is not a query result
        NotFound: when no feature intersects the point
    """
    if not isinstance(data, dict):
        raise LookupFailed("Upstream response is not a JSON object")
    if "error" in data:
        raise LookupFailed(f"Upstream returned an error: {data['error']}")
    features = data.get("features")
    if not features:
        raise NotFound("Upstream returned no features")
    if not isinstance(features[0], dict):
        raise LookupFailed("Upstream feature is not a JSON object")
    return features[0]


def package_huc(lat, lng, level, feature):
    """Package a matched WBD feature as the HUC lookup result.

    Args:
        lat (float): queried latitude
        lng (float): queried longitude
        level (str): normalized HUC level
        feature (dict): ArcGIS feature with `attributes` and `geometry`

    Returns:
        dict: JSON-like HUC result

    Raises:
        NotFound: when no HUC code can be resolved from the attributes
        LookupFailed: when the feature carries no polygon rings
    """
    attributes = feature.get("attributes") or {}
    if not isinstance(attributes, dict):
        raise NotFound("Feature attributes are not a JSON object")
    huc_code = attribute_str(attributes, pick_huc_field(attributes, level))
    if not huc_code:
        raise NotFound(f"No HUC code in attributes {sorted(attributes)}")

    huc_name = attribute_str(attributes, pick_name_field(attributes, level))

    geometry = feature.get("geometry") or {}
    if not isinstance(geometry, dict):
        raise LookupFailed("Feature geometry is not a JSON object")
    coordinates = rings_to_polygon(geometry.get("rings"))

    huc = {"code": huc_code}
    if huc_name:
        huc["name"] = huc_name
    huc["extra"] = {"sourceFields": attributes}

    return {
        "query": {"lat": lat, "lng": lng},
        "level": level,
        "huc": huc,
        "geometry": {
            "type": "Feature",
            "properties": {"huc": huc_code, "level": level},
            "geometry": {"type": "Polygon", "coordinates": coordinates},
        },
        "source": {"provider": HUC_SOURCE_PROVIDER, "layer": f"huc{level}"},
    }
