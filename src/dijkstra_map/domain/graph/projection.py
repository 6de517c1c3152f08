# domain/graph/projection.py
import math
from collections.abc import Sequence

EARTH_R = 6_378_137.0  # WGS84 semi-major axis (m)
METERS_PER_UNIT = 2.0  # 1 model unit = 2 m


# ------------------- Spherical Mercator ---------------------------
def project(lat: float, lon: float, *, radius_m: float = EARTH_R) -> tuple[float, float]:
    x = radius_m * lon * math.pi / 180.0
    y = radius_m * math.log(math.tan(math.pi / 4.0 + lat * math.pi / 360.0))
    return x, y


# ------------------- Batch normalization ---------------------------
def normalize(
    points: Sequence[tuple[float, float]], *, meters_per_unit: float = METERS_PER_UNIT
) -> list[tuple[float, float]]:
    """Translate by -minX, flip with maxY - y and divide by meters_per_unit.

    The same transform is applied to every point of the batch, so distances are
    only scaled by 1 / meters_per_unit.
    """
    if meters_per_unit <= 0:
        raise ValueError("meters_per_unit must be > 0")
    if not points:
        return []
    min_x = min(p[0] for p in points)
    max_y = max(p[1] for p in points)
    return [((x - min_x) / meters_per_unit, (max_y - y) / meters_per_unit) for x, y in points]


def to_meters(model_units: float, *, meters_per_unit: float = METERS_PER_UNIT) -> float:
    return model_units * meters_per_unit
