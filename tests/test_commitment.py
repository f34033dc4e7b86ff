import hmac
import unittest

from fair_dice.core.commitment import (
    Commitment,
    commit,
    new_secret,
    reveal,
    verify_commitment,
)
from fair_dice.core.errors import CommitmentError, InvalidInput


class TestCommit(unittest.TestCase):
    def test_commit_is_deterministic(self):
        key = new_secret()
        self.assertEqual(commit(key, 5), commit(key, 5))

    def test_digest_is_hmac_sha3_256_of_decimal_string(self):
        key = b"k" * 32
        expected = hmac.new(key, b"42", "sha3_256").hexdigest()
        self.assertEqual(commit(key, 42), expected)
        self.assertEqual(len(commit(key, 42)), 64)

    def test_different_values_give_different_digests(self):
        key = new_secret()
        self.assertNotEqual(commit(key, 1), commit(key, 2))

    def test_random_keys_do_not_collide(self):
        digests = {commit(new_secret(), 3) for _ in range(1000)}
        self.assertEqual(len(digests), 1000)

    def test_integral_float_commits_like_int(self):
        key = new_secret()
        self.assertEqual(commit(key, 4.0), commit(key, 4))

    def test_rejects_non_integer_values(self):
        key = new_secret()
        for bad in (None, "5", 2.5, float("nan"), float("inf"), True):
            with self.assertRaises(InvalidInput):
                commit(key, bad)

    def test_reveal_returns_key_that_reproduces_digest(self):
        key = new_secret()
        digest = commit(key, 6)
        self.assertTrue(verify_commitment(digest, reveal(key), 6))
        self.assertFalse(verify_commitment(digest, reveal(key), 5))
        self.assertFalse(verify_commitment(digest, new_secret(), 6))

    def test_verify_returns_false_for_uncommittable_value(self):
        key = new_secret()
        self.assertFalse(verify_commitment(commit(key, 1), key, "one"))

    def test_verify_returns_false_for_malformed_inputs(self):
        key = new_secret()
        digest = commit(key, 1)
        self.assertFalse(verify_commitment(None, key, 1))
        self.assertFalse(verify_commitment("é" * 64, key, 1))
        self.assertFalse(verify_commitment(digest, key.hex(), 1))
        self.assertFalse(verify_commitment(digest, key, 1, "no_such_hash"))


class TestNewSecret(unittest.TestCase):
    def test_default_length_and_freshness(self):
        a, b = new_secret(), new_secret()
        self.assertEqual(len(a), 32)
        self.assertNotEqual(a, b)

    def test_short_keys_rejected(self):
        self.assertEqual(len(new_secret(16)), 16)
        with self.assertRaises(InvalidInput):
            new_secret(15)


class TestCommitmentObject(unittest.TestCase):
    """
    A Commitment binds exactly one value: no second commit, no reuse after reveal.
    """

    def test_commit_then_reveal(self):
        c = Commitment.fresh("user_roll")
        digest = c.commit(3)
        self.assertEqual(c.value, 3)
        self.assertEqual(c.digest, digest)
        key = c.reveal()
        self.assertTrue(c.revealed)
        self.assertEqual(commit(key, 3), digest)
        self.assertEqual(c.key_hex(), key.hex())

    def test_second_commit_rejected(self):
        c = Commitment.fresh("first_move")
        c.commit(0)
        with self.assertRaises(CommitmentError):
            c.commit(1)

    def test_commit_after_reveal_rejected(self):
        c = Commitment.fresh("first_move")
        c.commit(0)
        c.reveal()
        with self.assertRaises(CommitmentError):
            c.commit(0)

    def test_reveal_before_commit_rejected(self):
        with self.assertRaises(CommitmentError):
            Commitment.fresh("computer_roll").reveal()

    def test_key_not_in_repr(self):
        c = Commitment.fresh("user_roll")
        self.assertNotIn(c.key_hex(), repr(c))

    def test_fresh_commitments_use_fresh_keys(self):
        self.assertNotEqual(Commitment.fresh("a").key, Commitment.fresh("b").key)


if __name__ == '__main__':
    unittest.main()
