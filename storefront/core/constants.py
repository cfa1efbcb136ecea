from enum import Enum


class TimeOfDay(str, Enum):
    morning = "morning"
    afternoon = "afternoon"
    evening = "evening"


class Role(str, Enum):
    customer = "customer"
    owner = "owner"


class SortOption(str, Enum):
    highest_rated = "Highest Rated"
    price_low_to_high = "Price: Low to High"
    price_high_to_low = "Price: High to Low"
    most_popular = "Most Popular"


# 🎛️ Sentinel selections that mean "no filter applied"
ALL_CATEGORIES = "All Categories"
ANY_TIME = "Any Time"
ALL_AREAS = "All Areas"

CATEGORIES = [
    "Pancakes",
    "Street Food",
    "South Indian",
    "Maharashtrian",
    "Snacks",
    "Chaats",
    "Breakfast",
    "Beverages",
]

TAGS = [
    "Vegetarian",
    "Vegan",
    "Gluten-Free",
    "Healthy",
    "Protein-Rich",
    "Spicy",
    "Sweet",
]

AREAS = ["Sakhrale", "Takari", "Islampur", "Walwa"]

TIME_SLOTS = {
    TimeOfDay.morning: {"label": "Morning", "hours": "6:00 AM - 11:00 AM"},
    TimeOfDay.afternoon: {"label": "Afternoon", "hours": "11:00 AM - 4:00 PM"},
    TimeOfDay.evening: {"label": "Evening", "hours": "4:00 PM - 9:00 PM"},
}

# 🎛️ Dropdown options, sentinel first
CATEGORY_OPTIONS = [ALL_CATEGORIES] + CATEGORIES
TIME_OPTIONS = [ANY_TIME] + [time.value for time in TimeOfDay]
SORT_OPTIONS = [option.value for option in SortOption]
AREA_OPTIONS = [ALL_AREAS] + AREAS
