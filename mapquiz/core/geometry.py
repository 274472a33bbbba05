"""
Geometry kernel - distance and containment

Distance:
  Haversine great-circle distance on a sphere of radius 6,371,000 m
  (same radius the browser map uses), converted to miles and rounded to 2 dp.

Containment:
  Even-odd ray casting against each polygon's outer ring (x = lng, y = lat).
  Holes are ignored. A MultiPolygon contains the point if any outer ring does.
"""
from math import radians, sin, cos, sqrt, atan2
from typing import Sequence

from mapquiz.models import Geometry, Point


EARTH_RADIUS_M = 6371000.0
METERS_TO_MILES = 0.000621371


def distance_meters(a: Point, b: Point) -> float:
    """
    Great-circle distance between two points

    Args:
        a, b: Points in degrees

    Returns:
        Distance in meters (unrounded)
    """
    lat1 = radians(a.lat)
    lat2 = radians(b.lat)
    dlat = lat2 - lat1
    dlng = radians(b.lng - a.lng)

    h = sin(dlat / 2) ** 2 + cos(lat1) * cos(lat2) * sin(dlng / 2) ** 2
    # Rounding can push h just past 1 for antipodal points
    h = min(1.0, max(0.0, h))
    c = 2 * atan2(sqrt(h), sqrt(1 - h))

    return EARTH_RADIUS_M * c


def distance_miles(a: Point, b: Point) -> float:
    """
    Distance in miles, rounded to 2 decimal places

    Example:
        Detroit (42.3314, -83.0458) to itself → 0.0
    """
    return round(distance_meters(a, b) * METERS_TO_MILES, 2)


def point_in_ring(x: float, y: float, ring: Sequence[Sequence[float]]) -> bool:
    """
    Ray-casting test against a single ring of [x, y] pairs

    Returns False for degenerate rings (fewer than 3 points).
    """
    n = len(ring)
    if n < 3:
        return False

    inside = False
    j = n - 1
    for i in range(n):
        xi, yi = ring[i][0], ring[i][1]
        xj, yj = ring[j][0], ring[j][1]

        # Edge straddles the horizontal ray and the crossing lies right of the point
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i

    return inside


def point_in_polygon(point: Point, geometry: Geometry) -> bool:
    """
    Check if a point lies inside a Polygon or MultiPolygon

    Args:
        point: Guess coordinate
        geometry: Target geometry with [lng, lat] rings

    Returns:
        True if the point is inside any outer ring
    """
    return any(
        point_in_ring(point.lng, point.lat, ring)
        for ring in geometry.outer_rings()
    )


def bounding_box_center(geometry: Geometry) -> Point:
    """
    Centre of the bounding box of all outer-ring vertices

    Raises:
        ValueError: If the geometry has no vertices
    """
    lngs = []
    lats = []
    for ring in geometry.outer_rings():
        for vertex in ring:
            lngs.append(vertex[0])
            lats.append(vertex[1])

    if not lngs:
        raise ValueError("Geometry has no vertices")

    return Point(
        lat=(min(lats) + max(lats)) / 2,
        lng=(min(lngs) + max(lngs)) / 2,
    )
