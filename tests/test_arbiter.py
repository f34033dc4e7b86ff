import random
import unittest

from fair_dice.core.arbiter import TurnArbiter
from fair_dice.core.errors import InsufficientDice, InvalidSelection
from fair_dice.core.rules import COMPUTER, USER


class ScriptedRng:
    """Returns pre-set values from randrange/choice so picks can be forced."""
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        v = self.values.pop(0)
        assert 0 <= v < n, f"scripted value {v} out of range {n}"
        return v

    def choice(self, seq):
        return seq[self.randrange(len(seq))]


class TestFirstMover(unittest.TestCase):
    def test_scripted_coin(self):
        arbiter = TurnArbiter(rng=ScriptedRng([0, 1]))
        self.assertEqual(arbiter.decide_first_mover(), USER)
        self.assertEqual(arbiter.decide_first_mover(), COMPUTER)

    def test_coin_is_roughly_fair(self):
        arbiter = TurnArbiter()
        n = 10000
        users = sum(1 for _ in range(n) if arbiter.decide_first_mover() == USER)
        self.assertLess(abs(users - n / 2), 350)


class TestAssignDice(unittest.TestCase):
    """
    Tests that both parties always get distinct dice, for every policy and dice count.
    """

    def test_indices_always_distinct(self):
        rng = random.Random(3)
        for computer_first_pick in ("random", "zero"):
            for second_pick in ("offset", "random_distinct"):
                arbiter = TurnArbiter(rng=rng, computer_first_pick=computer_first_pick, second_pick=second_pick)
                for n in range(2, 9):
                    for requested in range(n):
                        u, c = arbiter.assign_dice(USER, requested, n)
                        self.assertEqual(u, requested)
                        self.assertNotEqual(u, c)
                        self.assertTrue(0 <= c < n)
                    for _ in range(20):
                        u, c = arbiter.assign_dice(COMPUTER, None, n)
                        self.assertNotEqual(u, c)
                        self.assertTrue(0 <= u < n and 0 <= c < n)

    def test_user_first_offset_rule(self):
        arbiter = TurnArbiter(rng=ScriptedRng([]))
        self.assertEqual(arbiter.assign_dice(USER, 1, 3), (1, 2))
        self.assertEqual(arbiter.assign_dice(USER, 2, 3), (2, 0))

    def test_user_first_random_distinct(self):
        arbiter = TurnArbiter(rng=ScriptedRng([0, 1]), second_pick="random_distinct")
        # others for user=1 are [0, 2]
        self.assertEqual(arbiter.assign_dice(USER, 1, 3), (1, 0))
        self.assertEqual(arbiter.assign_dice(USER, 1, 3), (1, 2))

    def test_computer_first_random_pick(self):
        arbiter = TurnArbiter(rng=ScriptedRng([2]))
        self.assertEqual(arbiter.assign_dice(COMPUTER, None, 3), (0, 2))

    def test_computer_first_zero_pick(self):
        arbiter = TurnArbiter(rng=ScriptedRng([]), computer_first_pick="zero")
        self.assertEqual(arbiter.assign_dice(COMPUTER, 2, 4), (1, 0))

    def test_two_dice_forced_pair(self):
        for second_pick in ("offset", "random_distinct"):
            arbiter = TurnArbiter(rng=random.Random(1), second_pick=second_pick)
            self.assertEqual(arbiter.assign_dice(USER, 0, 2), (0, 1))
            self.assertEqual(arbiter.assign_dice(USER, 1, 2), (1, 0))
            for _ in range(10):
                self.assertEqual(sorted(arbiter.assign_dice(COMPUTER, None, 2)), [0, 1])

    def test_out_of_range_selection(self):
        arbiter = TurnArbiter()
        for bad in (7, 3, -1, None, "1", True):
            with self.assertRaises(InvalidSelection):
                arbiter.assign_dice(USER, bad, 3)

    def test_single_die_is_insufficient(self):
        with self.assertRaises(InsufficientDice):
            TurnArbiter().assign_dice(COMPUTER, None, 1)

    def test_unknown_policy(self):
        with self.assertRaises(ValueError):
            TurnArbiter(computer_first_pick="last")
        with self.assertRaises(ValueError):
            TurnArbiter(second_pick="mirror")


if __name__ == '__main__':
    unittest.main()
