"""
Configuration common to multiple routes.
"""

import os

HUC_SERVICE_URL = (
    os.getenv("HUC_SERVICE_URL")
    or "https://hydro.nationalmap.gov/arcgis/rest/services/wbd/MapServer"
)
# Only ever attached to the outbound query, never echoed back to callers.
HUC_SERVICE_TOKEN = os.getenv("HUC_SERVICE_TOKEN") or None
HUC_SOURCE_PROVIDER = os.getenv("HUC_SOURCE_PROVIDER") or "epa wsio arcgis"

HUC_CACHE_TTL = int(os.getenv("HUC_CACHE_TTL") or 24 * 60 * 60)
# 0 means the cache only expires entries, it never evicts them
HUC_CACHE_MAX_ENTRIES = int(os.getenv("HUC_CACHE_MAX_ENTRIES") or 0)
HUC_REQUEST_TIMEOUT = float(os.getenv("HUC_REQUEST_TIMEOUT") or 10)

if os.getenv("SITE_OFFLINE"):
    SITE_OFFLINE = os.getenv("SITE_OFFLINE").lower() == "true"
else:
    SITE_OFFLINE = False
