"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_progress.adapters.row_parsing import parse_float, parse_optional_float
from nutrition_progress.domain.profiles import UserProfile
from nutrition_progress.services.profiles import ProfileRepository

_COLUMNS = (
    "user_id, diet_type, daily_calorie_goal, daily_protein_goal, daily_carbs_goal, "
    "daily_fat_goal, daily_fiber_goal, daily_sugar_limit, weight, height, age, "
    "gender, activity_level, dietary_restrictions"
)


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_by_user_id(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""
        response = (
            self.client.table("user_profiles")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def save(self, profile: UserProfile) -> UserProfile:
        """Upsert the profile keyed on user_id."""
        response = (
            self.client.table("user_profiles")
            .upsert(
                {
                    "user_id": str(profile.user_id),
                    "diet_type": profile.diet_type,
                    "daily_calorie_goal": profile.daily_calorie_goal,
                    "daily_protein_goal": profile.daily_protein_goal,
                    "daily_carbs_goal": profile.daily_carbs_goal,
                    "daily_fat_goal": profile.daily_fat_goal,
                    "daily_fiber_goal": profile.daily_fiber_goal,
                    "daily_sugar_limit": profile.daily_sugar_limit,
                    "weight": profile.weight_kg,
                    "height": profile.height_cm,
                    "age": profile.age,
                    "gender": profile.gender,
                    "activity_level": profile.activity_level,
                    "dietary_restrictions": list(profile.dietary_restrictions),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save user profile")
        return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserProfile:
    age = parse_optional_float(row.get("age"))
    restrictions = row.get("dietary_restrictions") or []
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        diet_type=str(row.get("diet_type") or "balanced"),
        daily_calorie_goal=parse_float(row.get("daily_calorie_goal")),
        daily_protein_goal=parse_float(row.get("daily_protein_goal")),
        daily_carbs_goal=parse_float(row.get("daily_carbs_goal")),
        daily_fat_goal=parse_float(row.get("daily_fat_goal")),
        daily_fiber_goal=parse_optional_float(row.get("daily_fiber_goal")),
        daily_sugar_limit=parse_optional_float(row.get("daily_sugar_limit")),
        weight_kg=parse_optional_float(row.get("weight")),
        height_cm=parse_optional_float(row.get("height")),
        age=int(age) if age is not None else None,
        gender=_optional_str(row.get("gender")),
        activity_level=_optional_str(row.get("activity_level")),
        dietary_restrictions=tuple(str(item) for item in restrictions),
    )


def _optional_str(value: object) -> str | None:
    return str(value) if value else None
