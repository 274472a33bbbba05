"""
Dataset loader from JSON / GeoJSON files
"""
import json
import logging
from pathlib import Path
from typing import Dict, List, Tuple

from mapquiz.core.modes import DATA_SOURCES, POLYGON_SOURCES
from mapquiz.errors import DataLoadError
from mapquiz.models import Datasets, QuizConfig, Target
from mapquiz.normalizer import normalize_records


logger = logging.getLogger(__name__)


def load_dataset(path: str, source_key: str) -> List[Target]:
    """
    Load one dataset file

    Formats:
        JSON list of records:       [{"name": ..., "lat": ..., "lng": ...}, ...]
        GeoJSON FeatureCollection:  {"type": "FeatureCollection", "features": [...]}

    Args:
        path: File path
        source_key: Data source key

    Returns:
        Normalized targets in file order

    Raises:
        DataLoadError: If the file is missing, unreadable or not a record list
    """
    file_path = Path(path)

    if not file_path.exists():
        raise DataLoadError(f"Dataset file not found: {path}")

    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise DataLoadError(f"Could not read {path}: {e}") from e

    if isinstance(data, dict) and data.get("type") == "FeatureCollection":
        records = data.get("features") or []
    elif isinstance(data, list):
        records = data
    else:
        raise DataLoadError(f"{path}: expected a record list or FeatureCollection")

    return normalize_records(records, source_key, polygon=source_key in POLYGON_SOURCES)


def load_datasets(config: QuizConfig) -> Tuple[Datasets, Dict[str, str]]:
    """
    Load every configured dataset

    A failing dataset is logged and left empty so the other modes stay
    playable; its modes then fail to start with EmptyPoolError.

    Returns:
        (Datasets, {source key: error message})
    """
    loaded: Dict[str, List[Target]] = {}
    errors: Dict[str, str] = {}

    for source_key, file_name in config.datasets.items():
        if source_key not in DATA_SOURCES:
            logger.warning(f"⚠️ Unknown data source '{source_key}' in config, skipping")
            continue

        path = Path(config.data_dir) / file_name
        try:
            loaded[source_key] = load_dataset(str(path), source_key)
            logger.info(f"✅ Loaded {len(loaded[source_key])} {source_key} from {path}")
        except DataLoadError as e:
            logger.error(f"❌ Failed to load {source_key}: {e}")
            errors[source_key] = str(e)
            loaded[source_key] = []

    return Datasets(**loaded), errors
