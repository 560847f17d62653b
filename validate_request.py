"""
A module to validate request parameters such as latitude and longitude for the HUC lookup endpoint.
"""

from marshmallow import Schema, fields, validate, ValidationError, EXCLUDE

from errors import InvalidInput
from luts import default_huc_level


class HucQueryParamsSchema(Schema):
    """Query parameters accepted by the HUC lookup endpoint."""

    class Meta:
        unknown = EXCLUDE

    # allow_nan=False also rejects inf, so only finite degrees get through
    lat = fields.Float(
        required=True, allow_nan=False, validate=validate.Range(min=-90, max=90)
    )
    lng = fields.Float(
        required=True, allow_nan=False, validate=validate.Range(min=-180, max=180)
    )
    level = fields.Str(required=False, allow_none=True)


huc_params_schema = HucQueryParamsSchema()


def normalize_level(level):
    """Trim the requested HUC level, falling back to the finest level.

    Levels missing from the layer look-up table are returned as given so they
    can still be forwarded upstream.

    Args:
        level (str): raw `level` query parameter, may be None

    Returns:
        str: normalized level, e.g. "12"
    """
    if not isinstance(level, str):
        return default_huc_level
    return level.strip() or default_huc_level


def validate_huc_params(args):
    """Validate the raw lat, lng and level query parameters.

    Args:
        args (Mapping): query parameters, e.g. flask.request.args

    Returns:
        tuple: (lat, lng, level) as (float, float, str)

    Raises:
        InvalidInput: when lat or lng is absent, non-numeric or out of range
    """
    raw = {key: args.get(key) for key in ("lat", "lng", "level")}
    raw = {key: value for key, value in raw.items() if value is not None}
    try:
        params = huc_params_schema.load(raw)
    except ValidationError as exc:
        raise InvalidInput(str(exc.messages))
    return params["lat"], params["lng"], normalize_level(params.get("level"))
