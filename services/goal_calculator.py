# services/goal_calculator.py
import math
from typing import Dict, Any, Optional

DEFAULT_WEIGHT = 70      # kg
DEFAULT_AGE = 30         # years
DEFAULT_HEIGHT = 170     # cm
DEFAULT_ACTIVITY = 'light'
DEFAULT_GENDER = 'other'
DEFAULT_CLIMATE = 'moderate'

ACTIVITY_FACTORS = {
    'sedentary': -0.10,
    'light': 0.0,
    'moderate': 0.12,
    'very': 0.25,
    'extreme': 0.40,
}

GENDER_FACTORS = {
    'male': 0.05,
    'female': -0.03,
    'other': 0.0,
}

CLIMATE_FACTORS = {
    'hot': 0.10,
    'humid': 0.08,
    'dry': 0.05,
    'cold': -0.05,
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (Python's round() is banker's)"""
    return int(math.floor(value + 0.5))


class GoalCalculator:

    @staticmethod
    def base_rate_for_age(age: float) -> int:
        """ml of fluid per kg of body weight"""
        if age < 30:
            return 35
        if age > 60:
            return 30
        return 33

    @staticmethod
    def age_factor(age: float) -> float:
        return max(-0.1, min(0.1, (40 - age) / 200))

    @staticmethod
    def height_factor(height: float) -> float:
        return ((height - 170) / 170) * 0.06

    @staticmethod
    def calculate_daily_goal(
        weight: Optional[float] = None,
        age: Optional[float] = None,
        height: Optional[float] = None,
        activity: Optional[str] = None,
        gender: Optional[str] = None,
        climate: Optional[str] = None,
    ) -> int:
        """
        Personalized daily fluid goal in ml, rounded to the nearest 50.

        Missing (or zero / empty) inputs fall back to a 70kg, 30 year old,
        170cm person with a light activity level in a moderate climate.
        """
        w = weight or DEFAULT_WEIGHT
        a = age or DEFAULT_AGE
        h = height or DEFAULT_HEIGHT
        act = (activity or DEFAULT_ACTIVITY).lower()
        sex = (gender or DEFAULT_GENDER).lower()
        clim = (climate or DEFAULT_CLIMATE).lower()

        base = w * GoalCalculator.base_rate_for_age(a)

        adjustment_factor = (
            1
            + GoalCalculator.age_factor(a)
            + GENDER_FACTORS.get(sex, 0.0)
            + GoalCalculator.height_factor(h)
            + ACTIVITY_FACTORS.get(act, 0.0)
            + CLIMATE_FACTORS.get(clim, 0.0)
        )

        return round_half_up(base * adjustment_factor / 50) * 50

    @staticmethod
    def goal_for_profile(profile: Dict[str, Any]) -> int:
        """Run the calculator over a stored user profile row"""
        return GoalCalculator.calculate_daily_goal(
            weight=profile.get('weight'),
            age=profile.get('age'),
            height=profile.get('height'),
            activity=profile.get('activity_level'),
            gender=profile.get('gender'),
            climate=profile.get('climate'),
        )