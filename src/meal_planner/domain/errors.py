"""Domain exceptions for meal plan generation."""

MIN_DAY_COUNT = 1
MAX_DAY_COUNT = 7


class MealPlannerError(Exception):
    """Base error for the meal planner."""


class InvalidDayCountError(MealPlannerError, ValueError):
    """Raised when a day count falls outside the supported range."""

    def __init__(self, day_count: object) -> None:
        super().__init__(
            f"Day count must be an integer between {MIN_DAY_COUNT} and "
            f"{MAX_DAY_COUNT}, got {day_count!r}"
        )
        self.day_count = day_count


class GenerationFailure(MealPlannerError):
    """Any failure on the backend generation path."""


class BackendInvocationError(GenerationFailure):
    """The generative backend call failed."""


class MealPlanParseError(GenerationFailure):
    """No JSON object could be recovered from the backend response."""

    def __init__(self, message: str, raw: str) -> None:
        super().__init__(message)
        self.raw = raw


class MealPlanValidationError(GenerationFailure):
    """Parsed response does not match the meal plan schema."""


class ProfileNotFoundError(MealPlannerError):
    """Patient profile does not exist."""


class MealPlanNotFoundError(MealPlannerError):
    """Patient has no stored meal plan."""


def ensure_day_count(day_count: object) -> int:
    """Return the day count if it is an int within range, else raise."""
    if (
        isinstance(day_count, bool)
        or not isinstance(day_count, int)
        or not MIN_DAY_COUNT <= day_count <= MAX_DAY_COUNT
    ):
        raise InvalidDayCountError(day_count)
    return day_count
