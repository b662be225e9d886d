import unittest
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.logic.scoring.gaps import find_gaps
from mealplan.logic.scoring.scorer import score_pool
from mealplan.tests.pool_factory import make_candidate


class TestGapAnalyzer(unittest.TestCase):

    def setUp(self):
        self.pool = [
            make_candidate("B-1", "Breakfast", tags=["Recovery"]),
            make_candidate("D-1", "Dinner", tags=["Omega-3"]),
            make_candidate("S-1", "Snack", name="Cherry Almond Bites"),
        ]

    def test_only_total_absence_is_a_gap(self):
        profile = NeedsProfile(preferred_tags=["Recovery", "Sleep Support", "Omega-3"],
                               critical_tags=["Recovery", "Sleep Support"])
        self.assertEqual(find_gaps(score_pool(self.pool, profile), profile), ["Sleep Support"])

    def test_required_tags_come_first_and_dedupe(self):
        profile = NeedsProfile(required_tags=["Vegan", "Recovery"], preferred_tags=["Recovery", "Energy Boost"],
                               critical_tags=["recovery", "Energy Boost"])
        self.assertEqual(find_gaps(self.pool, profile), ["Vegan", "Energy Boost"])

    def test_name_match_counts_as_coverage(self):
        profile = NeedsProfile(preferred_tags=["Almond"], critical_tags=["Almond"])
        self.assertEqual(find_gaps(self.pool, profile), [])

    def test_no_needs_no_gaps(self):
        self.assertEqual(find_gaps(self.pool, NeedsProfile()), [])
        self.assertEqual(find_gaps([], NeedsProfile(required_tags=["Vegan"])), ["Vegan"])


if __name__ == '__main__':
    unittest.main()
