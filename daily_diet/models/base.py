# Importing this module registers every table on Base.metadata.
from .meal import ClientSession, Meal, MealSession  # noqa: F401
