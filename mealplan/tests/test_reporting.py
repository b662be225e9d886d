import unittest
from mealplan.domain.HealthSummary import HealthSummary
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.logic.reporting.pool import pool_statistics
from mealplan.logic.reporting.summary import describe_plan, slot_fill_phrases
from mealplan.logic.reporting.validation import validate_plan
from mealplan.logic.scheduling.assigner import assign_week
from mealplan.tests.pool_factory import make_candidate, make_pool, standard_pool


class TestPlanSummary(unittest.TestCase):

    def test_full_plan_from_library(self):
        profile = NeedsProfile(preferred_tags=["Recovery", "Omega-3", "Light", "Hydrating"])
        plan = assign_week(standard_pool(), profile, seed=1)
        report = validate_plan(plan, profile)
        self.assertEqual(slot_fill_phrases(report), [])
        text = describe_plan(plan, report, profile, HealthSummary.default())
        self.assertTrue(text["selection_summary"].startswith("Selected 28 meals (all 28 from your meal library)."))
        self.assertIn("Focused on Recovery, Omega-3, Light", text["selection_summary"])
        self.assertEqual(text["insights"], "Your good recovery (65%) and moderate fatigue levels guided "
                                           "this week's selection. We prioritized Recovery and Omega-3 meals.")

    def test_partial_plan_with_generated_meals(self):
        pool = make_pool({"Breakfast": 5, "Lunch": 6, "Snack": 7, "Dinner": 7})
        pool.append(make_candidate("ai_x_0", "Lunch", source="generated", has_media=False))
        profile = NeedsProfile()
        plan = assign_week(pool, profile, seed=1)
        report = validate_plan(plan, profile)
        self.assertEqual(slot_fill_phrases(report), ["5 of 7 breakfasts planned"])
        text = describe_plan(plan, report, profile)
        self.assertIn("Selected 26 meals (25 from your meal library and 1 generated", text["selection_summary"])
        self.assertIn("5 of 7 breakfasts planned.", text["selection_summary"])
        self.assertNotIn("prioritized", text["insights"])


class TestPoolStatistics(unittest.TestCase):

    def test_counts(self):
        pool = make_pool({"Breakfast": 2, "LunchOrDinner": 3}, media_per_type=1)
        pool.append(make_candidate("ai_1", "Snack", tags=["omega-3", "Light"], source="generated"))
        pool[0] = make_candidate("B-000", "Breakfast", tags=["Recovery"], has_media=True)
        stats = pool_statistics(pool)
        self.assertEqual(stats["total"], 6)
        self.assertEqual(stats["with_media"], 3)
        self.assertEqual(stats["generated"], 1)
        self.assertEqual(stats["by_slot_type"],
                         {"Breakfast": 2, "Lunch": 0, "Snack": 1, "Dinner": 0, "LunchOrDinner": 3})
        self.assertEqual(stats["tags"], ["Light", "omega-3", "Recovery"])

    def test_empty_pool(self):
        self.assertEqual(pool_statistics([])["total"], 0)


if __name__ == '__main__':
    unittest.main()
