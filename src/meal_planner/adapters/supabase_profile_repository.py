"""Supabase-backed patient profile repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.domain.profiles import Location, PatientProfile
from meal_planner.services.meal_plans import ProfileRepository

_COLUMNS = (
    "id, age, height_cm, weight_kg, meal_preference, activity_level, health_goal, "
    "disease_condition, medical_summary, blood_pressure, blood_group, allergies, "
    "disliked_items, location"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for reading patient profiles."""

    client: Client

    def get_profile(self, patient_id: UUID) -> PatientProfile | None:
        """Return the profile row for a patient id, if present."""
        response = (
            self.client.table("patient_profiles")
            .select(_COLUMNS)
            .eq("id", str(patient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return PatientProfile(
            id=UUID(row["id"]),
            age=row["age"],
            height_cm=row["height_cm"],
            weight_kg=row["weight_kg"],
            meal_preference=row["meal_preference"],
            activity_level=row["activity_level"],
            health_goal=row["health_goal"],
            disease_condition=row.get("disease_condition") or "",
            medical_summary=row.get("medical_summary"),
            blood_pressure=row.get("blood_pressure"),
            blood_group=row.get("blood_group"),
            allergies=row.get("allergies") or [],
            disliked_items=row.get("disliked_items") or [],
            location=Location.model_validate(row.get("location") or {}),
        )
