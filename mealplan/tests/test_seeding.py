import unittest
from mealplan.logic.scheduling.seeding import SEED_MODULUS, check_seed, derive_seed, next_seed


class TestSeeding(unittest.TestCase):

    def test_derive_seed_from_clock(self):
        self.assertEqual(derive_seed(now_ns=SEED_MODULUS + 5), 5)
        self.assertTrue(0 <= derive_seed() < SEED_MODULUS)

    def test_next_seed_never_repeats_previous(self):
        self.assertEqual(next_seed(5, now_ns=5), 6)
        self.assertEqual(next_seed(SEED_MODULUS - 1, now_ns=SEED_MODULUS - 1), 0)
        self.assertEqual(next_seed(5, now_ns=9), 9)

    def test_check_seed(self):
        self.assertEqual(check_seed(0), 0)
        for bad in ("1", 1.5, None, True, -17):
            with self.assertRaises(ValueError):
                check_seed(bad)


if __name__ == '__main__':
    unittest.main()
