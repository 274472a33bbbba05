"""
Data models for the map quiz
"""
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Kind of place a target represents"""
    CITY = "city"
    COUNTY_SEAT = "county_seat"
    COUNTY = "county"
    PARK = "park"
    DISTRICT = "district"


class MessageTier(str, Enum):
    """Result message bands, best first"""
    PERFECT_INSIDE = "perfect_inside"
    EXCELLENT = "excellent"
    GREAT = "great"
    WARM = "warm"
    KEEP_PRACTICING = "keep_practicing"
    TRY_AGAIN = "try_again"


class Point(BaseModel):
    """A lat/lng coordinate in degrees"""
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float
    lng: float


class Geometry(BaseModel):
    """
    GeoJSON-shaped area geometry

    Polygon:      coordinates = [ring, hole, ...]
    MultiPolygon: coordinates = [[ring, hole, ...], ...]
    Rings are lists of [lng, lat] pairs; the first ring of a polygon is its outer ring.
    """
    type: Literal["Polygon", "MultiPolygon"]
    coordinates: list

    def outer_rings(self) -> List[list]:
        if self.type == "Polygon":
            return [self.coordinates[0]] if self.coordinates else []
        return [polygon[0] for polygon in self.coordinates if polygon]


class Target(BaseModel):
    """A guessable place"""
    name: str
    category: Category
    location: Point                        # raw point, or bbox centre for areas
    geometry: Optional[Geometry] = None    # present only for area categories
    population: Optional[int] = None
    date_founded: Optional[str] = None
    fun_fact: Optional[str] = None
    is_county_seat: Optional[bool] = None
    district_label: Optional[str] = None


class DistanceThresholdScoring(BaseModel):
    """Success when the guess lands closer than threshold_miles"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["distance_threshold"] = "distance_threshold"
    threshold_miles: float


class ContainmentScoring(BaseModel):
    """Success when the guess lands inside the target polygon"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["containment"] = "containment"


ScoringRule = Annotated[
    Union[DistanceThresholdScoring, ContainmentScoring],
    Field(discriminator="kind"),
]


class ModeDefinition(BaseModel):
    """Static description of one game mode"""
    model_config = ConfigDict(frozen=True)

    key: str
    data_source_key: str
    label: str
    result_label: str
    next_action_label: str
    shows_population: bool = False
    shows_date_founded: bool = False
    wiki_suffix: str = ""
    has_pool_size_control: bool = False
    scoring: ScoringRule

    @property
    def is_polygon_mode(self) -> bool:
        return self.scoring.kind == "containment"


class RoundState(BaseModel):
    """The live round"""
    mode: str
    target: Target
    guessed: bool = False
    round_number: int = 1
    attempt: int = 1       # 1 = first guess on this target, +1 per retry


class RoundOutcome(BaseModel):
    """Result of one evaluated guess"""
    model_config = ConfigDict(frozen=True)

    success: bool
    distance_miles: float
    message_tier: MessageTier
    inside: Optional[bool] = None    # containment modes only
    counted: bool = True             # False for practice guesses after a retry


class SessionState(BaseModel):
    """Cross-round progression and preferences"""
    streak: int = Field(default=0, ge=0)
    high_score: int = Field(default=0, ge=0)
    cities_pool_size: int = 20     # -1 = all cities
    counties_visible: bool = False
    last_mode: Optional[str] = None


class Datasets(BaseModel):
    """Normalized targets per data source"""
    cities: List[Target] = []
    counties: List[Target] = []
    parks: List[Target] = []
    districts: List[Target] = []


class MapView(BaseModel):
    """Initial map view handed to the renderer"""
    center: List[float] = [44.3148, -85.6024]
    zoom: int = 7
    min_zoom: int = 6
    max_zoom: int = 12
    south_west: List[float] = [41.5, -90.5]
    north_east: List[float] = [48.5, -82.0]


class QuizConfig(BaseModel):
    """Configuration loaded from config/quiz.yaml"""
    data_dir: str = "data"
    datasets: dict = {}                     # data source key -> file name
    storage_path: str = "data/preferences.yaml"
    default_pool_size: int = 20
    map: MapView = MapView()
