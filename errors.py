"""Errors raised while looking up a HUC for a point.

Every error carries the HTTP status and the fixed message returned to the
caller; the underlying cause is only ever logged.
"""


class HucLookupError(Exception):
    status = 500
    message = "Lookup failed"

    def __init__(self, detail=None):
        super().__init__(detail or self.message)
        self.detail = detail

    def to_json(self):
        return {"error": self.message}


class InvalidInput(HucLookupError):
    """Latitude or longitude missing, non-numeric or outside WGS84 bounds."""

    status = 400
    message = "Invalid lat or lng"


class NotFound(HucLookupError):
    """No intersecting feature, or the feature has no resolvable HUC code."""

    status = 404
    message = "No HUC found for point"


class LookupFailed(HucLookupError):
    """Transport error, non-success status, bad body or missing geometry."""

    status = 500
    message = "Lookup failed"
