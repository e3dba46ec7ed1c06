"""Regional meal templates for the fallback generator.

Templates carry items and per-serving macros; calories are derived when the
template is scaled to a target.
"""

from dataclasses import dataclass

from meal_planner.domain.profiles import Location


@dataclass(frozen=True)
class MealTemplate:
    """Unscaled meal template."""

    items: str
    carbs_g: float
    protein_g: float
    fat_g: float
    fiber_g: float


# meal slot -> meal preference -> template
TemplateFamily = dict[str, dict[str, MealTemplate]]

INDIAN_TEMPLATES: TemplateFamily = {
    "breakfast": {
        "Vegetarian": MealTemplate(
            "2 whole wheat parathas with 1 cup curd, 1 tbsp pickle, "
            "1 glass buttermilk",
            60, 18, 15, 8,
        ),
        "Non-Vegetarian": MealTemplate(
            "2 egg parathas with mint chutney, 1 cup masala chai, 1 banana",
            55, 22, 18, 6,
        ),
        "Mixed": MealTemplate(
            "1 bowl upma with vegetables, 1 cup sambar, 1 coconut chutney",
            50, 15, 12, 7,
        ),
    },
    "lunch": {
        "Vegetarian": MealTemplate(
            "2 rotis, 1 cup dal, mixed vegetable curry, rice, pickle, curd",
            75, 20, 18, 12,
        ),
        "Non-Vegetarian": MealTemplate(
            "2 rotis, chicken curry, jeera rice, mixed vegetables, raita",
            70, 35, 20, 8,
        ),
        "Mixed": MealTemplate(
            "Vegetable biryani with raita, boiled egg, papad, pickle",
            80, 25, 15, 10,
        ),
    },
    "snacks": {
        "Vegetarian": MealTemplate(
            "1 cup masala chai with 2 whole wheat biscuits, handful of nuts",
            25, 8, 16, 4,
        ),
        "Non-Vegetarian": MealTemplate(
            "Chicken tikka (3 pieces) with mint chutney, 1 cup green tea",
            15, 20, 12, 2,
        ),
        "Mixed": MealTemplate(
            "1 bowl sprouts chaat with chutneys, 1 glass fresh lime water",
            30, 12, 8, 6,
        ),
    },
    "dinner": {
        "Vegetarian": MealTemplate(
            "2 rotis, palak paneer, dal, rice, cucumber salad",
            65, 22, 18, 12,
        ),
        "Non-Vegetarian": MealTemplate(
            "2 rotis, fish curry, rice, mixed vegetables, onion salad",
            60, 30, 20, 8,
        ),
        "Mixed": MealTemplate(
            "Khichdi with ghee, curd, pickle, roasted papad",
            55, 18, 15, 8,
        ),
    },
}

MEDITERRANEAN_TEMPLATES: TemplateFamily = {
    "breakfast": {
        "Vegetarian": MealTemplate(
            "Greek yogurt with honey, walnuts, fresh figs, whole grain toast",
            45, 20, 18, 8,
        ),
        "Non-Vegetarian": MealTemplate(
            "Mediterranean omelet with feta, tomatoes, olives, whole grain bread",
            35, 25, 22, 6,
        ),
        "Mixed": MealTemplate(
            "Avocado toast with tomatoes, olive oil, balsamic, fresh herbs",
            40, 12, 20, 10,
        ),
    },
    "lunch": {
        "Vegetarian": MealTemplate(
            "Greek salad with chickpeas, whole wheat pita, hummus, olive tapenade",
            60, 18, 25, 12,
        ),
        "Non-Vegetarian": MealTemplate(
            "Grilled fish with quinoa, roasted vegetables, tzatziki sauce",
            45, 35, 18, 8,
        ),
        "Mixed": MealTemplate(
            "Mediterranean bowl with falafel, tabbouleh, hummus, pita",
            65, 20, 22, 10,
        ),
    },
    "snacks": {
        "Vegetarian": MealTemplate(
            "Mixed olives, feta cheese, whole grain crackers, herbal tea",
            20, 8, 15, 4,
        ),
        "Non-Vegetarian": MealTemplate(
            "Prosciutto with melon, handful of almonds, sparkling water",
            15, 12, 10, 3,
        ),
        "Mixed": MealTemplate(
            "Hummus with vegetable sticks, whole grain pita, green tea",
            25, 8, 12, 6,
        ),
    },
    "dinner": {
        "Vegetarian": MealTemplate(
            "Ratatouille with quinoa, fresh herbs, olive oil, mixed greens",
            50, 15, 18, 12,
        ),
        "Non-Vegetarian": MealTemplate(
            "Grilled chicken with Mediterranean vegetables, brown rice, olive oil",
            45, 35, 20, 8,
        ),
        "Mixed": MealTemplate(
            "Seafood paella with vegetables, saffron, olive oil, lemon",
            55, 28, 15, 6,
        ),
    },
}

INTERNATIONAL_TEMPLATES: TemplateFamily = {
    "breakfast": {
        "Vegetarian": MealTemplate(
            "1 cup oatmeal with banana, walnuts, low-fat milk, honey",
            65, 15, 12, 8,
        ),
        "Non-Vegetarian": MealTemplate(
            "2 scrambled eggs, whole wheat toast, fresh berries, low-fat yogurt",
            45, 25, 15, 6,
        ),
        "Mixed": MealTemplate(
            "Greek yogurt with granola, sliced apple, almond butter",
            55, 20, 18, 7,
        ),
    },
    "lunch": {
        "Vegetarian": MealTemplate(
            "Mixed salad with chickpeas, quinoa, vegetables, olive oil dressing, "
            "whole wheat pita",
            75, 20, 18, 12,
        ),
        "Non-Vegetarian": MealTemplate(
            "Grilled chicken breast, brown rice, steamed broccoli, mixed vegetables",
            65, 35, 12, 8,
        ),
        "Mixed": MealTemplate(
            "Turkey and avocado wrap with whole wheat tortilla, side salad with "
            "vinaigrette",
            55, 28, 16, 9,
        ),
    },
    "snacks": {
        "Vegetarian": MealTemplate(
            "Apple with peanut butter, herbal tea", 25, 8, 16, 5
        ),
        "Non-Vegetarian": MealTemplate(
            "Hard-boiled egg, whole grain toast, vegetable juice",
            20, 10, 8, 3,
        ),
        "Mixed": MealTemplate(
            "Mixed nuts and dried fruits, string cheese", 22, 9, 14, 4
        ),
    },
    "dinner": {
        "Vegetarian": MealTemplate(
            "Lentil curry, brown rice, sautéed spinach, whole grain bread",
            70, 22, 15, 14,
        ),
        "Non-Vegetarian": MealTemplate(
            "Baked salmon, roasted sweet potato, steamed asparagus, "
            "mixed green salad",
            45, 40, 20, 8,
        ),
        "Mixed": MealTemplate(
            "Lean beef stir-fry with vegetables, quinoa, steamed edamame",
            55, 35, 18, 10,
        ),
    },
}

_INDIAN_COUNTRIES = ("india",)
_INDIAN_STATES = ("maharashtra", "gujarat", "punjab")
_MEDITERRANEAN_COUNTRIES = ("italy", "greece", "spain")

DEFAULT_PREFERENCE = "Mixed"


def templates_for_location(location: Location) -> TemplateFamily:
    """Pick a template family from a coarse country/state match."""
    country = (location.country or "").lower()
    state = (location.state or "").lower()
    if any(name in country for name in _INDIAN_COUNTRIES) or any(
        name in state for name in _INDIAN_STATES
    ):
        return INDIAN_TEMPLATES
    if any(name in country for name in _MEDITERRANEAN_COUNTRIES):
        return MEDITERRANEAN_TEMPLATES
    return INTERNATIONAL_TEMPLATES


def select_template(
    location: Location, meal_slot: str, meal_preference: str
) -> MealTemplate:
    """Return the template for a slot, falling back to the Mixed preference."""
    by_preference = templates_for_location(location)[meal_slot]
    return by_preference.get(meal_preference) or by_preference[DEFAULT_PREFERENCE]
