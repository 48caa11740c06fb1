"""Great-circle distance and proximity ranking for POIs and tours."""
import logging
import math
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from pydantic import ValidationError

from models.geo import GeoPoint, RankedResult

logger = logging.getLogger(__name__)

EARTH_RADIUS_METERS = 6_371_000  # mean Earth radius


class InvalidArgumentError(ValueError):
    """Raised for a negative radius or limit, or an unusable origin."""


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def as_geopoint(raw: Any) -> Optional[GeoPoint]:
    """Coerce a GeoPoint, mapping or lat/lon object; None if missing or malformed."""
    if raw is None or isinstance(raw, GeoPoint):
        return raw
    try:
        if isinstance(raw, Mapping):
            return GeoPoint.model_validate(raw)
        return GeoPoint(latitude=raw.latitude, longitude=raw.longitude)
    except (ValidationError, AttributeError, TypeError):
        return None


def poi_coordinates(candidate: Any) -> Optional[GeoPoint]:
    """Default accessor: the ``coordinates`` field of a POI record."""
    return as_geopoint(_field(candidate, "coordinates"))


def tour_coordinates(candidate: Any) -> Optional[GeoPoint]:
    """Default accessor for tours: the starting point, if the record has one."""
    for name in ("start_coordinates", "startCoordinates", "coordinates"):
        raw = _field(candidate, name)
        if raw is not None:
            return as_geopoint(raw)
    return None


def tour_languages(candidate: Any) -> set:
    raw = _field(candidate, "languages")
    if isinstance(raw, str):
        return {raw}
    if isinstance(raw, (list, tuple, set, frozenset)):
        return {lang for lang in raw if isinstance(lang, str)}
    return set()


def _require_origin(origin: Any) -> GeoPoint:
    point = as_geopoint(origin)
    if point is None:
        raise InvalidArgumentError(f"Invalid origin coordinates: {origin!r}")
    return point


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """
    Haversine great-circle distance in meters.

    Symmetric, and exactly 0.0 for identical points. Poles, antipodes and
    the anti-meridian need no special casing.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = (
        math.sin(d_phi / 2) ** 2
        + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    )
    h = min(1.0, h)  # rounding can push antipodal pairs a hair over 1
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_METERS * c


def nearby(
    origin: GeoPoint,
    candidates: Iterable[Any],
    radius_meters: float,
    coordinates: Callable[[Any], Optional[GeoPoint]] = poi_coordinates,
) -> List[RankedResult]:
    """
    Candidates within ``radius_meters`` of ``origin``, nearest first.

    Candidates without usable coordinates are skipped rather than failing
    the batch. Equal distances keep their input order.
    """
    if radius_meters is None or not radius_meters >= 0:
        raise InvalidArgumentError(f"radius_meters must be >= 0, got {radius_meters}")
    origin = _require_origin(origin)

    results = []
    for candidate in candidates:
        point = coordinates(candidate)
        if point is None:
            logger.debug(f"Skipping candidate without coordinates: {_field(candidate, 'id')}")
            continue
        d = distance(origin, point)
        if d <= radius_meters:
            results.append(RankedResult(candidate=candidate, distance_meters=d))

    # list.sort is stable
    results.sort(key=lambda r: r.distance_meters)
    return results


def recommend(
    candidates: Iterable[Any],
    preference_languages: Iterable[str],
    origin: Optional[GeoPoint] = None,
    limit: int = 5,
    coordinates: Callable[[Any], Optional[GeoPoint]] = tour_coordinates,
    languages: Callable[[Any], set] = tour_languages,
) -> List[RankedResult]:
    """
    Rank candidates offered in any of ``preference_languages`` by distance.

    One shared language is enough to qualify. Without an origin, or for a
    candidate without coordinates, the distance is ``inf`` and the candidate
    sorts after every located one. At most ``limit`` results are returned.
    """
    if limit is None or limit < 0:
        raise InvalidArgumentError(f"limit must be >= 0, got {limit}")
    if isinstance(preference_languages, str):
        preference_languages = [preference_languages]
    wanted = set(preference_languages or [])
    origin_point = _require_origin(origin) if origin is not None else None

    results = []
    for candidate in candidates:
        if not (languages(candidate) & wanted):
            continue
        d = math.inf
        if origin_point is not None:
            point = coordinates(candidate)
            if point is not None:
                d = distance(origin_point, point)
        results.append(RankedResult(candidate=candidate, distance_meters=d))

    results.sort(key=lambda r: r.distance_meters)
    return results[:limit]


def rank_all(
    origin: GeoPoint,
    candidates: Sequence[Any],
    coordinates: Callable[[Any], Optional[GeoPoint]] = poi_coordinates,
) -> List[RankedResult]:
    """Every candidate ordered by distance; unlocated ones last (``inf``)."""
    origin = _require_origin(origin)
    results = []
    for candidate in candidates:
        point = coordinates(candidate)
        d = distance(origin, point) if point is not None else math.inf
        results.append(RankedResult(candidate=candidate, distance_meters=d))
    results.sort(key=lambda r: r.distance_meters)
    return results
