from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field, asdict
from enum import Enum
from pydantic import BaseModel, Field, field_validator

from .reference_data import REFERENCE_DATA


class _ParsableEnum(str, Enum):
    """String enum with a case-insensitive lookup that never raises."""

    @classmethod
    def parse(cls, value: Optional[str]):
        """Return the matching member, or None for an unrecognized value."""
        if value is None:
            return None
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class Gender(_ParsableEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class SmokingStatus(_ParsableEnum):
    NEVER = "never"
    FORMER = "former"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class AlcoholConsumption(_ParsableEnum):
    NONE = "none"
    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"


class Severity(_ParsableEnum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class BodyMassCategory(_ParsableEnum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class AgeBracket(_ParsableEnum):
    YOUNG = "young"
    MIDDLE = "middle"
    SENIOR = "senior"
    ELDERLY = "elderly"


class Impact(_ParsableEnum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class RiskLevel(_ParsableEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def from_factor_count(cls, count: int) -> "RiskLevel":
        """Classify risk by how many negative factors were found."""
        if count >= 3:
            return cls.HIGH
        if count >= 1:
            return cls.MEDIUM
        return cls.LOW


@dataclass
class Disease:
    """An existing health condition and how severe it is."""
    name: str
    severity: str = Severity.MILD.value


@dataclass
class UserProfile:
    """Demographic, body and lifestyle attributes of one person.

    Categorical fields are kept as the raw strings supplied by the caller;
    the scoring engine matches them case-insensitively and treats unknown
    values as neutral.
    """
    country: str
    gender: str
    height: float
    weight: float
    age: float
    smoking: str = SmokingStatus.NEVER.value
    alcohol: str = AlcoholConsumption.NONE.value
    diseases: List[Disease] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Factor:
    """One attribute that moved the prediction."""
    name: str
    impact: str
    description: str


@dataclass
class CountryComparison:
    """Prediction measured against the national average."""
    country: str
    average: float
    difference: float
    percentage: float


@dataclass
class AnalysisReport:
    """Prediction together with its explanation."""
    prediction: float
    factors: List[Factor] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    risk_level: str = RiskLevel.LOW.value
    country_comparison: Optional[CountryComparison] = None

    def to_dict(self) -> Dict[str, Any]:
        """Plain dictionary suitable for JSON serialization."""
        return asdict(self)


class DiseaseModel(BaseModel):
    name: str = Field(min_length=1)
    severity: Severity = Severity.MILD

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Disease name cannot be empty')
        return v.strip()

    @field_validator('severity', mode='before')
    @classmethod
    def normalize_severity(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


class ProfileConfigModel(BaseModel):
    """Pydantic model for validating a profile submitted by a form, JSON file or API call."""
    country: str = REFERENCE_DATA.default_country
    gender: Gender
    height: float = Field(ge=100, le=250, description="Height in centimetres")
    weight: float = Field(ge=30, le=300, description="Weight in kilograms")
    age: int = Field(ge=1, le=120)
    smoking: SmokingStatus = SmokingStatus.NEVER
    alcohol: AlcoholConsumption = AlcoholConsumption.NONE
    diseases: List[DiseaseModel] = Field(default_factory=list)

    @field_validator('country')
    @classmethod
    def validate_country(cls, v):
        code = v.strip().upper()
        if not REFERENCE_DATA.is_supported(code):
            raise ValueError(f'Unsupported country code: {v}')
        return code

    @field_validator('gender', 'smoking', 'alcohol', mode='before')
    @classmethod
    def normalize_case(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_user_profile(self) -> UserProfile:
        """Convert this config model to a UserProfile object."""
        return UserProfile(
            country=self.country,
            gender=self.gender.value,
            height=self.height,
            weight=self.weight,
            age=self.age,
            smoking=self.smoking.value,
            alcohol=self.alcohol.value,
            diseases=[Disease(name=d.name, severity=d.severity.value) for d in self.diseases],
        )
