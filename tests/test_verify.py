import dataclasses
import unittest

from fair_dice.core.engine import GameEngine
from fair_dice.core.verify import GameTranscript, verify_transcript
from fair_dice.persistence import serializer

DICE = [[1, 2, 3, 4, 5, 6], [6, 5, 4, 3, 2, 1], [2, 2, 4, 4, 6, 6]]


class ScriptedRng:
    def __init__(self, values):
        self.values = list(values)

    def randrange(self, n):
        return self.values.pop(0)

    def choice(self, seq):
        return seq[self.randrange(len(seq))]


def play_game():
    # USER first, picks die 1 -> computer die 2; faces 0 and 4 -> rolls 6 and 6
    return GameEngine(DICE, rng=ScriptedRng([0, 0, 4])).play(lambda low, high: 1)


def replace_proof(transcript, label, **changes):
    proofs = tuple(dataclasses.replace(p, **changes) if p.label == label else p for p in transcript.proofs)
    return dataclasses.replace(transcript, proofs=proofs)


class TestVerifyTranscript(unittest.TestCase):
    """
    The verifier only trusts the transcript: any edited value, key or roll must be reported.
    """

    def test_honest_game_verifies(self):
        t = play_game()
        self.assertEqual(t.outcome, "TIE")
        self.assertEqual(verify_transcript(t), [])

    def test_tampered_roll_value(self):
        t = play_game()
        forged = replace_proof(t, "user_roll", value=5)
        problems = verify_transcript(forged)
        self.assertTrue(any("user_roll: digest" in p for p in problems))

    def test_wrong_key(self):
        t = play_game()
        forged = replace_proof(t, "computer_roll", key_hex="00" * 32)
        self.assertTrue(any(p.startswith("computer_roll: digest") for p in verify_transcript(forged)))

    def test_garbage_key_hex(self):
        t = play_game()
        forged = replace_proof(t, "first_move", key_hex="not-hex")
        self.assertTrue(any(p.startswith("first_move: digest") for p in verify_transcript(forged)))

    def test_declared_first_mover_must_match_commitment(self):
        t = play_game()
        forged = dataclasses.replace(t, first_mover="COMPUTER")
        self.assertTrue(any("declared COMPUTER" in p for p in verify_transcript(forged)))

    def test_roll_must_match_die_face(self):
        t = play_game()
        forged = dataclasses.replace(t, user_roll=dataclasses.replace(t.user_roll, face_index=1))
        self.assertTrue(any("face 1 of die 1 is 5" in p for p in verify_transcript(forged)))

    def test_outcome_must_follow_rolls(self):
        t = play_game()
        forged = dataclasses.replace(t, outcome="USER_WINS")
        self.assertTrue(any(p.startswith("outcome:") for p in verify_transcript(forged)))

    def test_same_die_reported(self):
        t = play_game()
        forged = dataclasses.replace(t, computer_die_index=1)
        self.assertIn("both parties were assigned the same die", verify_transcript(forged))

    def test_missing_proof(self):
        t = play_game()
        forged = dataclasses.replace(t, proofs=t.proofs[:2])
        self.assertIn("computer_roll: missing commitment proof", verify_transcript(forged))

    def test_negative_die_index_cannot_alias_another_die(self):
        t = play_game()
        # user plays die 1; -2 would resolve to the same die through Python indexing
        forged = dataclasses.replace(
            t,
            computer_die_index=-2,
            computer_roll=dataclasses.replace(t.computer_roll, die_index=-2),
        )
        problems = verify_transcript(forged)
        self.assertIn("computer die index -2 is not in [0, 3)", problems)

    def test_out_of_range_and_non_int_die_index(self):
        t = play_game()
        self.assertTrue(verify_transcript(dataclasses.replace(t, user_die_index=3)))
        self.assertIn("user die index '1' is not in [0, 3)",
                      verify_transcript(dataclasses.replace(t, user_die_index="1")))

    def test_unaccepted_hash_is_reported(self):
        t = play_game()
        for name in ("bogus", "md5"):
            problems = verify_transcript(dataclasses.replace(t, hash_name=name))
            self.assertTrue(any(p.startswith("hash:") for p in problems), name)

    def test_malformed_proof_fields_are_reported(self):
        t = play_game()
        cases = [
            ("user_roll", {"digest": None}),
            ("user_roll", {"digest": "é" * 64}),
            ("computer_roll", {"key_hex": None}),
            ("first_move", {"value": "0"}),
        ]
        for label, changes in cases:
            problems = verify_transcript(replace_proof(t, label, **changes))
            self.assertTrue(any(p.startswith(f"{label}: digest") for p in problems), changes)

    def test_non_integer_rolls_are_reported(self):
        t = play_game()
        forged = dataclasses.replace(t, user_roll=dataclasses.replace(t.user_roll, value="6"))
        self.assertTrue(any(p.startswith("outcome: rolls") for p in verify_transcript(forged)))

    def test_json_transcript_verifies(self):
        t = play_game()
        loaded = GameTranscript.from_dict(serializer.loads(serializer.dumps(t)))
        self.assertEqual(loaded, t)
        self.assertEqual(verify_transcript(loaded), [])


if __name__ == '__main__':
    unittest.main()
