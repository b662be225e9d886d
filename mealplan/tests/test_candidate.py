import unittest
from pydantic import ValidationError
from mealplan.domain.Candidate import MealCandidate


class TestMealCandidate(unittest.TestCase):

    def test_from_dict_normalizes_record(self):
        c = MealCandidate.from_dict({
            "id": 42,
            "slot_type": "Lunch/Dinner",
            "name": "Salmon Bowl",
            "tags": ["Omega-3", "  ", " High-Protein "],
            "image_url": "https://example.com/salmon.png",
            "instructions": ["Cook rice", "", "Sear salmon"],
        })
        self.assertEqual(c.id, "42")
        self.assertEqual(c.slot_type, "LunchOrDinner")
        self.assertEqual(c.tags, ("Omega-3", "High-Protein"))
        self.assertTrue(c.has_media)
        self.assertEqual(c.instructions, ["Cook rice", "Sear salmon"])
        self.assertEqual(c.source, "pool")

    def test_explicit_has_media_wins_over_image_url(self):
        c = MealCandidate.from_dict({"id": "B-1", "slot_type": "breakfast", "has_media": False,
                                     "image_url": "x.png"})
        self.assertFalse(c.has_media)
        self.assertEqual(c.slot_type, "Breakfast")

    def test_from_dict_rejects_bad_records(self):
        with self.assertRaises(ValidationError):
            MealCandidate.from_dict({"id": "X", "slot_type": "Brunch"})
        with self.assertRaises(ValidationError):
            MealCandidate.from_dict({"id": "", "slot_type": "Snack"})

    def test_from_dict_source_override(self):
        c = MealCandidate.from_dict({"id": "ai_1", "slot_type": "Dinner"}, source="generated")
        self.assertTrue(c.is_generated)

    def test_slot_compatibility(self):
        wildcard = MealCandidate("LD-1", "LunchOrDinner")
        self.assertTrue(wildcard.is_compatible_with("Lunch"))
        self.assertTrue(wildcard.is_compatible_with("Dinner"))
        self.assertFalse(wildcard.is_compatible_with("Breakfast"))
        self.assertFalse(wildcard.is_compatible_with("Snack"))
        lunch = MealCandidate("L-1", "Lunch")
        self.assertTrue(lunch.is_compatible_with("Lunch"))
        self.assertFalse(lunch.is_compatible_with("Dinner"))

    def test_id_is_read_only(self):
        c = MealCandidate("S-1", "Snack")
        with self.assertRaises(AttributeError):
            c.id = "S-2"

    def test_to_dict_round_trip_keeps_payload(self):
        c = MealCandidate("D-1", "Dinner", tags=["Light"], nutrition={"calories": 450},
                          ingredients=[{"name": "cod", "amount": "150g"}])
        again = MealCandidate(**c.to_dict())
        self.assertEqual(again.to_dict(), c.to_dict())

    def test_constructor_validation(self):
        with self.assertRaises(ValueError):
            MealCandidate("", "Lunch")
        with self.assertRaises(ValueError):
            MealCandidate("L-1", "Supper")
        with self.assertRaises(ValueError):
            MealCandidate("L-1", "Lunch", source="scraped")


if __name__ == '__main__':
    unittest.main()
