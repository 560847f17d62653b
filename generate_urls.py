"""A module to generate query URLs"""

from luts import huc_level_layers


def get_layer_token(level):
    """Map a HUC level to its upstream layer ID, passing unknown levels through."""
    return huc_level_layers.get(level, level)


def generate_huc_layer_url(service_url, level):
    """Resolve the URL of the WBD layer serving the requested HUC level.

    A `{level}` placeholder in the service URL is replaced by the layer token.
    A bare MapServer URL gets the layer token appended as a path segment.

    Args:
        service_url (str): configured upstream endpoint
        level (str): normalized HUC level

    Returns:
        URL of the layer, without a trailing slash
    """
    layer_token = get_layer_token(level)
    resolved_url = service_url.replace("{level}", layer_token).rstrip("/")
    if resolved_url.endswith("/MapServer"):
        resolved_url = f"{resolved_url}/{layer_token}"
    return resolved_url


def generate_huc_query_url(service_url, level):
    return f"{generate_huc_layer_url(service_url, level)}/query"


def generate_huc_query_params(lat, lng, token=None):
    """Build the ArcGIS spatial intersection query for a single point.

    Args:
        lat (float): latitude in WGS84 degrees
        lng (float): longitude in WGS84 degrees
        token (str): optional access token for the upstream service

    Returns:
        dict of query string parameters
    """
    params = {
        "geometry": f"{lng},{lat}",
        "geometryType": "esriGeometryPoint",
        "inSR": "4326",
        "spatialRel": "esriSpatialRelIntersects",
        "outFields": "*",
        "returnGeometry": "true",
        "outSR": "4326",
        "f": "json",
    }
    if token:
        params["token"] = token
    return params
