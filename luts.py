"""Module for look-up-table like objects"""

# HUC level -> layer ID of the WBD MapServer
huc_level_layers = {
    "8": "4",
    "10": "5",
    "12": "6",
}

default_huc_level = "12"


def huc_name_fields(level):
    """Ordered name-field spellings seen across WBD providers and layers.

    Args:
        level (str): HUC level, e.g. "12"

    Returns:
        list of lowercase attribute names, most preferred first
    """
    return [
        "name",
        f"huc{level}_name",
        f"huc{level}name",
        "gnis_name",
        "gnisname",
        "huc_name",
    ]
