"""Category labels shipped with the default taxonomy."""

FOOD = "food"
TRANSPORT = "transport"
OFFICE = "office"
UTILITIES = "utilities"
ENTERTAINMENT = "entertainment"
HEALTHCARE = "healthcare"
SHOPPING = "shopping"

# Assigned when no keyword of any category matches
OTHER = "other"

DEFAULT_CATEGORIES = [
    FOOD,
    TRANSPORT,
    OFFICE,
    UTILITIES,
    ENTERTAINMENT,
    HEALTHCARE,
    SHOPPING,
]
