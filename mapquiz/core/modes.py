"""
Mode catalog

Each mode names a data source, a scoring rule and display metadata.
Data sources resolve to typed accessors over Datasets when the catalog is
registered, so no mode ever looks its records up by attribute name.
"""
from typing import Callable, Dict, List

from mapquiz.errors import UnknownModeError
from mapquiz.models import (
    ContainmentScoring,
    Datasets,
    DistanceThresholdScoring,
    ModeDefinition,
    Target,
)


DataSourceAccessor = Callable[[Datasets], List[Target]]

# data source key → accessor
DATA_SOURCES: Dict[str, DataSourceAccessor] = {
    "cities": lambda datasets: datasets.cities,
    "counties": lambda datasets: datasets.counties,
    "parks": lambda datasets: datasets.parks,
    "districts": lambda datasets: datasets.districts,
}

# Data sources whose records are areas (geometry required)
POLYGON_SOURCES = {"counties", "parks", "districts"}

CITY_THRESHOLD_MILES = 5.0


_MODES = [
    ModeDefinition(
        key="cities",
        data_source_key="cities",
        label="Major Cities",
        result_label="City",
        next_action_label="Next City",
        shows_population=True,
        shows_date_founded=True,
        wiki_suffix=",_Michigan",
        has_pool_size_control=True,
        scoring=DistanceThresholdScoring(threshold_miles=CITY_THRESHOLD_MILES),
    ),
    ModeDefinition(
        key="county-seats",
        data_source_key="cities",
        label="County Seats",
        result_label="County Seat",
        next_action_label="Next County Seat",
        shows_population=True,
        shows_date_founded=True,
        wiki_suffix=",_Michigan",
        scoring=DistanceThresholdScoring(threshold_miles=CITY_THRESHOLD_MILES),
    ),
    ModeDefinition(
        key="counties",
        data_source_key="counties",
        label="Counties",
        result_label="County",
        next_action_label="Next County",
        wiki_suffix="_County,_Michigan",
        scoring=ContainmentScoring(),
    ),
    ModeDefinition(
        key="parks",
        data_source_key="parks",
        label="State Parks",
        result_label="Park",
        next_action_label="Next Park",
        scoring=ContainmentScoring(),
    ),
    ModeDefinition(
        key="districts",
        data_source_key="districts",
        label="Districts",
        result_label="District",
        next_action_label="Next District",
        scoring=ContainmentScoring(),
    ),
]

MODE_CATALOG: Dict[str, ModeDefinition] = {mode.key: mode for mode in _MODES}

# mode key → accessor, resolved once here
_MODE_ACCESSORS: Dict[str, DataSourceAccessor] = {
    mode.key: DATA_SOURCES[mode.data_source_key] for mode in _MODES
}


def get_mode(mode_key: str) -> ModeDefinition:
    """
    Look up a mode definition

    Raises:
        UnknownModeError: If mode_key is not registered
    """
    mode = MODE_CATALOG.get(mode_key)
    if mode is None:
        raise UnknownModeError(mode_key)
    return mode


def list_modes() -> List[ModeDefinition]:
    """All modes in catalog order"""
    return list(_MODES)


def records_for(mode_key: str, datasets: Datasets) -> List[Target]:
    """Raw records backing a mode"""
    get_mode(mode_key)
    return _MODE_ACCESSORS[mode_key](datasets)
