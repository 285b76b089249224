"""
Coordinate and unit conversions used when writing navigation files.
"""

from .constants import PI


def _hemisphere(value: float, longitude: bool) -> str:
    if longitude:
        return "E" if value > 0 else "W"
    return "N" if value > 0 else "S"


def ddmmff(value: float, longitude: bool) -> str:
    """
    Convert a DD.FF coordinate to DD:MM.FFF with a hemisphere letter.

    >>> ddmmff(45.5, True)
    '45:30.000E'
    """
    magnitude = abs(value)
    deg = int(magnitude)
    minutes = (magnitude - deg) * 60
    return f"{deg}:{minutes:06.3f}{_hemisphere(value, longitude)}"


def ddmmss(value: float, longitude: bool) -> str:
    """
    Convert a DD.FF coordinate to DD:MM:SS with a hemisphere letter.

    Degrees are padded to three digits for longitudes and two for latitudes.
    """
    magnitude = abs(value)
    deg = int(magnitude)
    fraction = (magnitude - deg) * 60
    minutes = int(fraction)
    seconds = int((fraction - minutes) * 60)
    width = 3 if longitude else 2
    return f"{deg:0{width}d}:{minutes:02d}:{seconds:02d}{_hemisphere(value, longitude)}"


def kmh_to_ms(value: int) -> int:
    """Convert km/h to m/s, rounded half up."""
    return int(value * 10.0 / 36 + 0.5)


def deg_to_rad(angle: float) -> float:
    return angle * PI / 180


def rad_to_deg(angle: float) -> float:
    return angle * 180 / PI
