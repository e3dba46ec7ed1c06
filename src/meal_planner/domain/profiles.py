"""Patient profile models consumed by meal plan generation."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

MEAL_PREFERENCES = ("Vegetarian", "Non-Vegetarian", "Mixed")
ACTIVITY_LEVELS = ("Sedentary", "Lightly Active", "Moderately Active", "Very Active")
HEALTH_GOALS = (
    "Weight Loss",
    "Weight Maintenance",
    "Muscle Gain",
    "Manage Condition",
)
BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")


class Location(BaseModel):
    """Free-form location used for regional food choices."""

    country: str | None = None
    state: str | None = None
    city: str | None = None

    def is_empty(self) -> bool:
        """Return true when no location part is set."""
        return not (self.country or self.state or self.city)


class PatientProfile(BaseModel):
    """Health attributes of a patient.

    Field bounds are enforced by the profile subsystem; only the shape is
    checked here. Enumerated values are kept as plain strings so that
    unknown values fall through to generator defaults.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: UUID | None = None
    age: int = Field(gt=0)
    height_cm: float = Field(gt=0)
    weight_kg: float = Field(gt=0)
    meal_preference: str = Field(alias="mealPreference")
    activity_level: str = Field(alias="activityLevel")
    health_goal: str = Field(alias="healthGoal")
    disease_condition: str = Field(default="", alias="diseaseCondition")
    medical_summary: str | None = Field(default=None, alias="medicalSummary")
    blood_pressure: str | None = Field(default=None, alias="bloodPressure")
    blood_group: str | None = Field(default=None, alias="bloodGroup")
    allergies: list[str] = Field(default_factory=list)
    disliked_items: list[str] = Field(default_factory=list, alias="dislikedItems")
    location: Location = Field(default_factory=Location)
