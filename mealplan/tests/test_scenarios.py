"""Whole-week scenarios run through plan_week."""
import unittest
from mealplan.domain.HealthSummary import HealthSummary
from mealplan.logic.planning.service import plan_week
from mealplan.utilities.constants import DAYS
from mealplan.tests.pool_factory import make_candidate, make_pool, standard_pool


class TestPlanningScenarios(unittest.TestCase):

    def test_full_pool_fills_every_cell(self):
        result = plan_week(standard_pool(), HealthSummary.default(), seed=42)
        self.assertEqual(result.plan.filled_count, 28)
        self.assertEqual(result.warnings, [])
        self.assertEqual(result.report.unfilled_cells, 0)
        self.assertTrue(result.report.passed)
        ids = result.plan.candidate_ids()
        self.assertEqual(len(ids), len(set(ids)))

    def test_short_breakfast_pool_leaves_cells_empty(self):
        pool = make_pool({"Breakfast": 3, "Lunch": 7, "Snack": 7, "Dinner": 7})
        result = plan_week(pool, seed=42)
        self.assertEqual(len(result.warnings), 4)
        self.assertEqual([(w.day, w.slot_position) for w in result.warnings],
                         [(d, "Breakfast") for d in ("Thursday", "Friday", "Saturday", "Sunday")])
        ids = result.plan.candidate_ids()
        self.assertEqual(len(ids), len(set(ids)))
        self.assertEqual(result.report.filled_for("Breakfast"), 3)
        self.assertIn("3 of 7 breakfasts planned", result.selection_summary)

    def test_wildcard_only_lunch_and_dinner(self):
        pool = make_pool({"Breakfast": 7, "Snack": 7, "LunchOrDinner": 10})
        result = plan_week(pool, seed=42)
        filled = [(d, s) for d in DAYS for s in ("Lunch", "Dinner") if result.plan.cell(d, s) is not None]
        self.assertEqual(len(filled), 10)
        self.assertEqual(len(result.warnings), 4)
        self.assertEqual({w.day for w in result.warnings}, {"Saturday", "Sunday"})
        self.assertEqual(result.report.slot_violations, [])

    def test_media_bias_meets_coverage_target(self):
        pool = make_pool({"Breakfast": 10, "Lunch": 10, "Snack": 10, "Dinner": 10}, media_per_type=8)
        result = plan_week(pool, seed=42)
        self.assertEqual(result.plan.filled_count, 28)
        self.assertGreaterEqual(result.report.media_coverage_percentage, 75.0)
        self.assertTrue(result.report.meets_media_target)

    def test_poor_recovery_prefers_tagged_meals(self):
        pool = standard_pool(per_type=9, has_media=True)
        tagged = [make_candidate(f"D-tagged-{i}", "Dinner", tags=["Anti-Inflammatory"]) for i in range(2)]
        summary = HealthSummary.from_averages(recovery=35, strain=9, sleep=5.5)
        result = plan_week(pool + tagged, summary, seed=8)
        self.assertEqual(result.plan.cell("Monday", "Dinner").candidate.tags, ("Anti-Inflammatory",))
        self.assertIn("Anti-Inflammatory", result.plan.cell("Monday", "Dinner").rationale)


if __name__ == '__main__':
    unittest.main()
