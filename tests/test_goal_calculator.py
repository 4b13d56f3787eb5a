import pytest

from services.goal_calculator import GoalCalculator, round_half_up


def test_defaults_follow_formula():
    # 70kg * 33ml = 2310, age factor (40 - 30) / 200 = 0.05, everything else neutral
    # 2310 * 1.05 = 2425.5 -> 48.51 * 50 -> 2450
    assert GoalCalculator.calculate_daily_goal() == 2450


def test_explicit_defaults_match_missing_inputs():
    explicit = GoalCalculator.calculate_daily_goal(
        weight=70, age=30, height=170, activity='light', gender='other', climate='moderate'
    )
    assert explicit == GoalCalculator.calculate_daily_goal()


def test_zero_and_empty_inputs_fall_back_to_defaults():
    assert GoalCalculator.calculate_daily_goal(weight=0, age=0, height=0, activity='') == 2450


def test_active_young_male_in_hot_climate():
    # 2800 * (1 + 0.075 + 0.05 + 0.00353 + 0.12 + 0.10) = 3775.9 -> 3800
    goal = GoalCalculator.calculate_daily_goal(
        weight=80, age=25, height=180, activity='moderate', gender='male', climate='hot'
    )
    assert goal == 3800


def test_sedentary_older_female_in_cold_climate():
    # 60kg * 30ml = 1800, age factor clamped to -0.1
    # 1800 * (1 - 0.1 - 0.03 - 0.00353 - 0.1 - 0.05) = 1289.6 -> 1300
    goal = GoalCalculator.calculate_daily_goal(
        weight=60, age=65, height=160, activity='sedentary', gender='female', climate='cold'
    )
    assert goal == 1300


def test_age_factor_is_clamped():
    assert GoalCalculator.age_factor(10) == 0.1
    assert GoalCalculator.age_factor(90) == -0.1
    assert GoalCalculator.age_factor(40) == 0


@pytest.mark.parametrize("age,rate", [(18, 35), (29, 35), (30, 33), (60, 33), (61, 30)])
def test_base_rate_age_bands(age, rate):
    assert GoalCalculator.base_rate_for_age(age) == rate


def test_unknown_activity_and_case_insensitive_inputs():
    assert GoalCalculator.calculate_daily_goal(activity='couch') == 2450
    assert GoalCalculator.calculate_daily_goal(activity='VERY', gender='Male') == \
        GoalCalculator.calculate_daily_goal(activity='very', gender='male')


def test_goal_is_deterministic_multiple_of_50():
    inputs = dict(weight=83.4, age=47, height=191, activity='extreme', gender='female', climate='humid')
    goals = {GoalCalculator.calculate_daily_goal(**inputs) for _ in range(5)}

    assert len(goals) == 1
    goal = goals.pop()
    assert goal > 0
    assert goal % 50 == 0


def test_goal_for_profile_reads_profile_columns():
    profile = {'weight': 60, 'age': 65, 'height': 160, 'activity_level': 'sedentary',
               'gender': 'female', 'climate': 'cold', 'name': 'Ada'}
    assert GoalCalculator.goal_for_profile(profile) == 1300


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(48.5) == 49
    assert round_half_up(2.4999) == 2
    assert round_half_up(-2.5) == -2
