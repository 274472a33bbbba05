"""
Normalizer for heterogeneous dataset records (point and area features)
"""
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from mapquiz.core.geometry import bounding_box_center
from mapquiz.models import Category, Geometry, Point, Target


logger = logging.getLogger(__name__)


# Accepted property spellings, first match wins
NAME_KEYS = ("name", "Name", "NAME")
FUN_FACT_KEYS = ("funFact", "fun_fact", "description")
POPULATION_KEYS = ("population", "Population", "POP")
DATE_FOUNDED_KEYS = ("dateFounded", "date_founded", "founded")
COUNTY_SEAT_KEYS = ("isCountySeat", "is_county_seat")
DISTRICT_KEYS = ("districtLabel", "district", "label")
LAT_KEYS = ("lat", "latitude", "Latitude")
LNG_KEYS = ("lng", "lon", "longitude", "Longitude")

SOURCE_CATEGORIES = {
    "cities": Category.CITY,
    "counties": Category.COUNTY,
    "parks": Category.PARK,
    "districts": Category.DISTRICT,
}


def _first(props: Dict, keys) -> Optional[object]:
    for key in keys:
        value = props.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).replace(",", "").strip())
    except ValueError:
        return None


def _to_bool(value) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "yes", "1")


def normalize_record(record: Dict, source_key: str, polygon: bool) -> Optional[Target]:
    """
    Normalize one raw record into a Target

    Accepts either a flat dict:
        {"name": "Detroit", "lat": 42.3314, "lng": -83.0458, "population": 639111, ...}
    or a GeoJSON Feature:
        {"type": "Feature", "properties": {"Name": "Wayne", ...},
         "geometry": {"type": "Polygon", "coordinates": [[[lng, lat], ...]]}}

    Args:
        record: Raw record
        source_key: Data source key (decides category)
        polygon: Whether this source requires area geometry

    Returns:
        Target, or None if the record is unusable (logged)
    """
    if record.get("type") == "Feature":
        props = record.get("properties") or {}
        raw_geometry = record.get("geometry")
    else:
        props = record
        raw_geometry = record.get("geometry")

    name = _first(props, NAME_KEYS)
    if not name:
        logger.warning(f"⚠️ Skipping {source_key} record without a name")
        return None
    name = str(name).strip()

    geometry = None
    if polygon:
        try:
            geometry = Geometry.model_validate(raw_geometry) if raw_geometry else None
            location = bounding_box_center(geometry) if geometry else None
        except (ValidationError, ValueError, IndexError, TypeError) as e:
            logger.warning(f"⚠️ Skipping {source_key} '{name}': bad geometry ({e})")
            return None
        if location is None:
            logger.warning(f"⚠️ Skipping {source_key} '{name}': polygon geometry required")
            return None
    else:
        lat = _first(props, LAT_KEYS)
        lng = _first(props, LNG_KEYS)
        try:
            if (lat is None or lng is None) and isinstance(raw_geometry, dict) and raw_geometry.get("type") == "Point":
                lng, lat = raw_geometry["coordinates"][:2]
            location = Point(lat=float(lat), lng=float(lng))
        except (KeyError, TypeError, ValueError):
            logger.warning(f"⚠️ Skipping {source_key} '{name}': missing coordinates")
            return None

    is_county_seat = _to_bool(_first(props, COUNTY_SEAT_KEYS))
    category = SOURCE_CATEGORIES.get(source_key, Category.CITY)
    if category == Category.CITY and is_county_seat:
        category = Category.COUNTY_SEAT

    fun_fact = _first(props, FUN_FACT_KEYS)
    date_founded = _first(props, DATE_FOUNDED_KEYS)
    district_label = _first(props, DISTRICT_KEYS)

    return Target(
        name=name,
        category=category,
        location=location,
        geometry=geometry,
        population=_to_int(_first(props, POPULATION_KEYS)),
        date_founded=str(date_founded) if date_founded is not None else None,
        fun_fact=str(fun_fact) if fun_fact is not None else None,
        is_county_seat=is_county_seat,
        district_label=str(district_label) if district_label is not None else None,
    )


def normalize_records(records: List[Dict], source_key: str, polygon: bool) -> List[Target]:
    """Normalize a record list, dropping unusable records and keeping order"""
    targets = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning(f"⚠️ Skipping non-object {source_key} record: {record!r}")
            continue
        target = normalize_record(record, source_key, polygon)
        if target is not None:
            targets.append(target)
    return targets
