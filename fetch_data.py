"""
A module of data gathering functions for the HUC lookup endpoint.
"""

import time
import logging
from aiohttp import ClientSession, ClientTimeout

from config import HUC_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


async def make_get_request(url, session, params=None):
    """Make an awaitable GET request to a URL, return json

    Args:
        url (str): query URL
        session (aiohttp.ClientSession): the client session instance
        params (dict): query string parameters

    Returns:
        Decoded JSON body
    """
    resp = await session.request(method="GET", url=url, params=params)
    resp.raise_for_status()
    # ArcGIS REST often labels JSON as text/plain, so skip the content-type check
    data = await resp.json(content_type=None)
    return data


async def fetch_arcgis_query(url, params, timeout=HUC_REQUEST_TIMEOUT):
    """Run a single ArcGIS REST query with a bounded total timeout.

    Args:
        url (str): layer query URL, e.g. .../MapServer/6/query
        params (dict): query string parameters
        timeout (float): seconds before the request is abandoned

    Returns:
        Decoded JSON body of the query

    Raises:
        aiohttp.ClientError: on transport errors or a non-2xx status
        asyncio.TimeoutError: when the timeout elapses
    """
    start_time = time.time()
    async with ClientSession(timeout=ClientTimeout(total=timeout)) as session:
        data = await make_get_request(url, session, params=params)
    logger.info(
        f"Fetched ArcGIS query {url}, elapsed time {time.time() - start_time:.3f}s"
    )
    return data
