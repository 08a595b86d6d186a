"""Spherical geometry over sample locations.

Distances are great-circle (haversine) metres on a mean-radius Earth.
The weighted centre averages unit vectors on the sphere, each sample
weighted by the inverse variance of its horizontal accuracy, so precise
fixes pull harder than noisy ones.  Radius is measured with the same
haversine distance from that centre.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Iterable, Sequence

from timeline_segments.domain.location import Location

EARTH_RADIUS_M = 6_371_000.0

# Accuracy floor (metres) so a reported accuracy of 0 does not get infinite weight
_MIN_ACCURACY_M = 1.0


def haversine_m(a: Location, b: Location) -> float:
    """Great-circle distance in metres between two locations."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2.0) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2.0) ** 2
    # rounding can push h just outside [0, 1] for near-antipodal points
    h = min(1.0, max(0.0, h))
    return 2.0 * EARTH_RADIUS_M * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def accuracy_weight(location: Location) -> float:
    accuracy = max(location.horizontal_accuracy, _MIN_ACCURACY_M)
    return 1.0 / (accuracy * accuracy)


def weighted_center(locations: Sequence[Location]) -> Location | None:
    """Inverse-variance weighted centre of *locations*.

    Returns None for an empty sequence and the location itself for a
    single one.  The result's ``horizontal_accuracy`` is the weighted mean
    accuracy of the inputs.
    """
    if not locations:
        return None
    if len(locations) == 1:
        return locations[0]

    weights = [accuracy_weight(loc) for loc in locations]
    total_weight = sum(weights)
    if total_weight == 0.0:
        # every accuracy so large its weight underflowed; weigh them equally
        weights = [1.0] * len(locations)
        total_weight = float(len(locations))

    x = y = z = 0.0
    weighted_accuracy = 0.0
    for loc, weight in zip(locations, weights):
        w = weight / total_weight
        lat = math.radians(loc.latitude)
        lon = math.radians(loc.longitude)
        x += math.cos(lat) * math.cos(lon) * w
        y += math.cos(lat) * math.sin(lon) * w
        z += math.sin(lat) * w
        weighted_accuracy += max(loc.horizontal_accuracy, 0.0) * w

    hyp = math.hypot(x, y)
    return Location(
        latitude=math.degrees(math.atan2(z, hyp)),
        longitude=math.degrees(math.atan2(y, x)),
        horizontal_accuracy=weighted_accuracy,
    )


@dataclass(frozen=True)
class Radius:
    """Dispersion of locations around a centre: mean distance and its standard deviation."""

    mean: float
    sd: float

    ZERO: ClassVar["Radius"]

    @property
    def with_1sd(self) -> float:
        return self.mean + self.sd

    @property
    def with_2sd(self) -> float:
        return self.mean + self.sd * 2

    @classmethod
    def from_center(cls, locations: Iterable[Location], center: Location) -> "Radius":
        distances = [haversine_m(loc, center) for loc in locations]
        if not distances:
            return cls.ZERO
        mean = sum(distances) / len(distances)
        variance = sum((d - mean) ** 2 for d in distances) / len(distances)
        return cls(mean=mean, sd=math.sqrt(variance))


Radius.ZERO = Radius(mean=0.0, sd=0.0)


def path_distance(locations: Sequence[Location]) -> float:
    """Cumulative point-to-point distance along *locations* in the given order."""
    return sum(
        haversine_m(locations[i], locations[i + 1])
        for i in range(len(locations) - 1)
    )
