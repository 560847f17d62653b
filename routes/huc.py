import asyncio
import logging
import time

from aiohttp import ClientError
from flask import abort, jsonify, request

# local imports
from config import HUC_CACHE_TTL, HUC_SERVICE_TOKEN, HUC_SERVICE_URL
from errors import HucLookupError, LookupFailed
from fetch_data import fetch_arcgis_query
from generate_urls import generate_huc_query_params, generate_huc_query_url
from huc_cache import HucCache, get_cache_key
from postprocessing import get_first_feature, package_huc
from validate_request import validate_huc_params
from . import routes

logger = logging.getLogger(__name__)

# Shared by every request handled by this process.
huc_cache = HucCache()


async def fetch_huc(lat, lng, level):
    """Query the WBD service for the HUC containing a point.

    Args:
        lat (float): latitude
        lng (float): longitude
        level (str): normalized HUC level

    Returns:
        JSON-like dict of the normalized HUC result

    Raises:
        NotFound: no intersecting feature or no resolvable HUC code
        LookupFailed: transport error, timeout, bad status or missing geometry
    """
    url = generate_huc_query_url(HUC_SERVICE_URL, level)
    params = generate_huc_query_params(lat, lng, HUC_SERVICE_TOKEN)
    try:
        data = await fetch_arcgis_query(url, params)
    except (ClientError, asyncio.TimeoutError, ValueError) as exc:
        raise LookupFailed(f"WBD query to {url} failed: {exc!r}") from exc

    feature = get_first_feature(data)
    return package_huc(lat, lng, level, feature)


def lookup_huc(raw_lat, raw_lng, raw_level=None):
    """Validate the request, then answer from the cache or the WBD service.

    Failed lookups are never cached, so an identical request retries upstream.

    Args:
        raw_lat (str): latitude as received
        raw_lng (str): longitude as received
        raw_level (str): requested HUC level, defaults to "12"

    Returns:
        JSON-like dict of the normalized HUC result

    Raises:
        InvalidInput, NotFound, LookupFailed
    """
    lat, lng, level = validate_huc_params(
        {"lat": raw_lat, "lng": raw_lng, "level": raw_level}
    )
    cache_key = get_cache_key(lat, lng, level)

    cached = huc_cache.get(cache_key)
    if cached is not None:
        logger.info(f"HUC cache hit: key={cache_key}")
        return cached

    logger.info(f"HUC cache miss: key={cache_key}")
    payload = asyncio.run(fetch_huc(lat, lng, level))
    huc_cache.put(cache_key, payload)
    return payload


@routes.route("/api/huc", methods=["GET"], provide_automatic_options=False)
def run_lookup_huc():
    """Look up the HUC polygon containing a point and return it as JSON

    Notes:
        example request: http://localhost:5000/api/huc?lat=42.2808&lng=-83.7430&level=12
    """
    # Werkzeug adds HEAD to every GET rule; only GET runs a lookup
    if request.method != "GET":
        abort(405, valid_methods=["GET"])

    start_time = time.time()
    args = request.args
    logger.info(
        f"HUC endpoint accessed: lat={args.get('lat')}, lng={args.get('lng')}, level={args.get('level')}"
    )
    try:
        payload = lookup_huc(args.get("lat"), args.get("lng"), args.get("level"))
    except HucLookupError as exc:
        elapsed = time.time() - start_time
        if exc.status >= 500:
            logger.error(
                f"HUC lookup failed: {exc.detail} (in {elapsed:.3f} seconds)"
            )
        else:
            logger.warning(
                f"HUC lookup returned {exc.status}: {exc.detail} (in {elapsed:.3f} seconds)"
            )
        response = jsonify(exc.to_json())
        response.status_code = exc.status
        response.cache_control.no_store = True
        return response

    elapsed = time.time() - start_time
    logger.info(
        f"HUC lookup returned {payload['huc']['code']} (in {elapsed:.3f} seconds)"
    )
    response = jsonify(payload)
    response.cache_control.max_age = HUC_CACHE_TTL
    return response
