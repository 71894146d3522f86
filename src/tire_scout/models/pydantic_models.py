"""Pydantic models for catalog records, preferences and scoring results."""

from enum import Enum

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class Season(str, Enum):
    """Season codes as stored in the catalog documents."""

    SUMMER = "So"
    WINTER = "Wi"


class Criterion(str, Enum):
    """Scored dimensions of a product."""

    PRICE = "price"
    WET_GRIP = "wet_grip"
    FUEL_EFFICIENCY = "fuel_efficiency"
    SATISFACTION = "satisfaction"
    NOISE = "noise"


class Direction(str, Enum):
    """Whether a higher or a lower raw value is better."""

    ASCENDING = "ascending"
    DESCENDING = "descending"


class RoundingPolicy(str, Enum):
    """How renormalized preference weights are rounded to integers."""

    INDEPENDENT = "independent"
    LARGEST_REMAINDER = "largest_remainder"


class SortField(str, Enum):
    """Columns the ranking can be ordered by."""

    ATTRACTIVENESS_SCORE = "attractiveness_score"
    VENDOR = "vendor"
    BRAND = "brand"
    MODEL = "model"
    SIZE = "size"
    PRICE = "price"
    USER_RATING = "user_rating"
    WET_GRIP = "wet_grip"
    FUEL_EFFICIENCY = "fuel_efficiency"
    NOISE_LEVEL = "noise_level"


class SortOrder(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class ProductRecord(BaseModel):
    """One catalog entry as delivered by the document store.

    Scoring fields are kept raw; parsing happens in the scoring layer so
    that malformed values degrade to "no value" instead of failing here.
    """

    id: str | int | None = None
    vendor: str | None = None
    brand: str | None = None
    model: str | None = None
    size: str | None = None
    season: str | None = None
    width: int | float | str | None = None
    profile: int | float | str | None = None
    rim_size: int | float | str | None = Field(
        None, validation_alias=AliasChoices("rim_size", "rimSize", "diameter")
    )
    price: int | float | str | None = Field(None, description="Price in currency units")
    noise_level: int | float | str | None = Field(
        None,
        validation_alias=AliasChoices("noise_level", "noiseLevel"),
        description="Decibels, possibly with unit or as 'X/Y dB'",
    )
    wet_grip: str | int | None = Field(
        None,
        validation_alias=AliasChoices("wet_grip", "wetGrip"),
        description="EU label grade A-E",
    )
    fuel_efficiency: str | int | None = Field(
        None,
        validation_alias=AliasChoices("fuel_efficiency", "fuelEfficiency"),
        description="EU label grade A-G",
    )
    user_rating: int | float | str | None = Field(
        None,
        validation_alias=AliasChoices("user_rating", "userRating", "dex_rating"),
        description="Customer rating 1-5",
    )

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class PreferenceSet(BaseModel):
    """Five importance weights, each 0-100, kept summing to 100 by edits."""

    price: int = Field(
        20, ge=0, le=100, validation_alias=AliasChoices("price", "priceImportance")
    )
    wet_grip: int = Field(
        20,
        ge=0,
        le=100,
        validation_alias=AliasChoices("wet_grip", "wetGrip", "wetGripImportance"),
    )
    fuel_efficiency: int = Field(
        20,
        ge=0,
        le=100,
        validation_alias=AliasChoices(
            "fuel_efficiency", "fuelEfficiency", "fuelEfficiencyImportance"
        ),
    )
    satisfaction: int = Field(
        20,
        ge=0,
        le=100,
        validation_alias=AliasChoices("satisfaction", "satisfactionImportance"),
    )
    noise: int = Field(
        20, ge=0, le=100, validation_alias=AliasChoices("noise", "noiseImportance")
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @property
    def total(self) -> int:
        """Sum of the five weights; 0 when all zero."""
        return sum(self.as_dict().values())

    def weight(self, criterion: Criterion) -> int:
        """Return the weight for one criterion."""
        return int(getattr(self, criterion.value))

    def as_dict(self) -> dict[Criterion, int]:
        """Return weights keyed by criterion, in criterion order."""
        return {criterion: self.weight(criterion) for criterion in Criterion}


class NormalizedScoreSet(BaseModel):
    """Per-product criterion scores relative to one comparison set."""

    price: float = Field(0.0, ge=0, le=1)
    wet_grip: float = Field(0.0, ge=0, le=1)
    fuel_efficiency: float = Field(0.0, ge=0, le=1)
    satisfaction: float = Field(0.0, ge=0, le=1)
    noise: float = Field(0.0, ge=0, le=1)

    model_config = ConfigDict(frozen=True)

    def score(self, criterion: Criterion) -> float:
        """Return the normalized score for one criterion."""
        return float(getattr(self, criterion.value))


def default_grade_table() -> dict[str, int]:
    """EU tire label letter grades mapped to ordinal values."""
    return {"A": 5, "B": 4, "C": 3, "D": 2, "E": 1, "F": 0, "G": 0}


class NoiseRange(BaseModel):
    """Physically plausible tire noise in decibels (closed interval)."""

    min: float = Field(50.0, description="Lowest accepted dB value")
    max: float = Field(100.0, description="Highest accepted dB value")

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> "NoiseRange":
        if self.min > self.max:
            raise ValueError(f"noise_range min {self.min} exceeds max {self.max}")
        return self

    def contains(self, value: float) -> bool:
        """Return True if value lies within the closed range."""
        return self.min <= value <= self.max


class ScoringConfig(BaseModel):
    """Tables and bounds used by the parsers and the preference model."""

    grade_table: dict[str, int] = Field(
        default_factory=default_grade_table, description="Letter grade to ordinal value"
    )
    noise_range: NoiseRange = Field(default_factory=NoiseRange)
    rounding: RoundingPolicy = Field(
        RoundingPolicy.LARGEST_REMAINDER, description="Weight rounding after renormalization"
    )
    preferences: PreferenceSet = Field(
        default_factory=PreferenceSet, description="Starting importance weights"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("grade_table")
    @classmethod
    def _uppercase_grades(cls, value: dict[str, int]) -> dict[str, int]:
        return {str(grade).strip().upper(): int(points) for grade, points in value.items()}


class ScoredProduct(BaseModel):
    """A product with its scores for the current comparison set."""

    product: ProductRecord
    position: int = Field(..., ge=0, description="Index in the comparison set")
    normalized_scores: NormalizedScoreSet | None = None
    attractiveness_score: int = Field(0, ge=0, le=100)


class SortConfig(BaseModel):
    """Active column and direction of the ranking view."""

    field: SortField = SortField.ATTRACTIVENESS_SCORE
    order: SortOrder = SortOrder.DESC

    model_config = ConfigDict(frozen=True)

    def toggle(self, field: SortField) -> "SortConfig":
        """Select a column: the active one flips direction, a new one starts ascending."""
        if field == self.field and self.order == SortOrder.ASC:
            return SortConfig(field=field, order=SortOrder.DESC)
        return SortConfig(field=field, order=SortOrder.ASC)


class RankingResult(BaseModel):
    """Ordered view over a scored comparison set."""

    items: list[ScoredProduct] = Field(default_factory=list)
    sort: SortConfig = Field(default_factory=SortConfig)
    scored: bool = Field(False, description="False when no preferences were given")


class CatalogQuery(BaseModel):
    """Equality predicates used to select a comparison set."""

    season: str | None = None
    width: float | None = None
    profile: float | None = None
    rim_size: float | None = None

    def is_empty(self) -> bool:
        """Return True if no predicate is set."""
        return all(value is None for value in self.model_dump().values())


class CatalogStats(BaseModel):
    """Summary of one numeric metric across a catalog slice."""

    metric: str
    total: int = Field(0, ge=0, description="Records with a positive value")
    min: float | None = None
    max: float | None = None
    average: float | None = None
    season_breakdown: dict[str, int] = Field(default_factory=dict)



class BrandStats(BaseModel):
    """Product count of one brand, split by season."""

    brand: str
    total: int = Field(0, ge=0)
    summer: int = Field(0, ge=0)
    winter: int = Field(0, ge=0)
