from __future__ import annotations

import math
from typing import Iterable, TypeVar

EARTH_RADIUS_KM = 6371.0

T = TypeVar("T")


def planar_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Euclidean distance in degree space; only meaningful for comparing nearby points."""
    dx = lat1 - lat2
    dy = lon1 - lon2
    return math.sqrt(dx * dx + dy * dy)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def sort_by_distance(items: Iterable[T], latitude: float, longitude: float) -> list[T]:
    """Return *items* ordered closest-first to (latitude, longitude).

    Items must expose ``latitude`` and ``longitude`` attributes. The sort is
    stable, so equidistant items keep their input order.
    """
    return sorted(
        items,
        key=lambda item: planar_distance(latitude, longitude, item.latitude, item.longitude),
    )


def filter_within_radius(
    items: Iterable[T],
    latitude: float,
    longitude: float,
    radius_km: float,
) -> list[T]:
    return [
        item
        for item in items
        if haversine_km(latitude, longitude, item.latitude, item.longitude) <= radius_km
    ]
