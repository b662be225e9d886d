import unittest
from collections import Counter, defaultdict
from types import SimpleNamespace
from mealplan.domain.NeedsProfile import NeedsProfile
from mealplan.logic.scheduling.tiers import TIERS, CROSS_SLOT_TIER, tiers_for
from mealplan.tests.pool_factory import make_candidate


def _run(candidates, profile, used=(), used_today=(), counts=None):
    by_type = defaultdict(list)
    for c in candidates:
        by_type[c.slot_type].append(c)
    return SimpleNamespace(profile=profile, used_ids=set(used), used_today=set(used_today),
                           type_counts=Counter(counts or {}), by_type=by_type)


class TestFallbackTiers(unittest.TestCase):

    def setUp(self):
        self.tiers = {t.name: t for t in TIERS}
        self.profile = NeedsProfile(required_tags=["Vegan"], exclude_tags=["Caffeine"])
        self.pool = [
            make_candidate("L-vegan", "Lunch", tags=["Vegan"]),
            make_candidate("L-coffee", "Lunch", tags=["Vegan", "Caffeine"]),
            make_candidate("L-plain", "Lunch"),
            make_candidate("LD-vegan", "LunchOrDinner", tags=["Vegan"]),
            make_candidate("B-vegan", "Breakfast", tags=["Vegan"]),
        ]

    def _ids(self, tier, position, run):
        return [c.id for c in self.tiers[tier].eligible(position, run)]

    def test_tier_order(self):
        self.assertEqual([t.name for t in TIERS],
                         ["exact", "wildcard", "relaxed_exact", "relaxed_wildcard", "any_unused"])
        self.assertEqual(tiers_for(True)[-1], CROSS_SLOT_TIER)
        self.assertNotIn(CROSS_SLOT_TIER, tiers_for(False))

    def test_exact_tier_applies_all_filters(self):
        run = _run(self.pool, self.profile)
        self.assertEqual(self._ids("exact", "Lunch", run), ["L-vegan"])

    def test_wildcard_tier_only_for_lunch_and_dinner(self):
        run = _run(self.pool, self.profile)
        self.assertEqual(self._ids("wildcard", "Dinner", run), ["LD-vegan"])
        self.assertEqual(self._ids("wildcard", "Breakfast", run), [])

    def test_relaxed_tier_drops_exclusion_only(self):
        run = _run(self.pool, self.profile, used=["L-vegan"])
        self.assertEqual(self._ids("exact", "Lunch", run), [])
        self.assertEqual(self._ids("relaxed_exact", "Lunch", run), ["L-coffee"])

    def test_any_unused_ignores_tags_but_not_compatibility(self):
        run = _run(self.pool, self.profile, used=["L-vegan", "L-coffee", "LD-vegan"])
        self.assertEqual(self._ids("any_unused", "Lunch", run), ["L-plain"])
        self.assertEqual(self._ids("any_unused", "Snack", run), [])

    def test_same_day_and_cap_filters(self):
        run = _run(self.pool, self.profile, used_today=["L-vegan"])
        self.assertEqual(self._ids("exact", "Lunch", run), [])
        capped = _run(self.pool, NeedsProfile(max_per_slot_type={"Lunch": 1}), counts={"Lunch": 1})
        self.assertEqual(self._ids("any_unused", "Lunch", capped), ["LD-vegan"])

    def test_cross_slot_tier_draws_from_any_type(self):
        run = _run(self.pool, self.profile)
        ids = [c.id for c in CROSS_SLOT_TIER.eligible("Snack", run)]
        self.assertEqual(sorted(ids), sorted(c.id for c in self.pool))


if __name__ == '__main__':
    unittest.main()
