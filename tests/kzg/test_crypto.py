"""
Tests for KZG10 cryptographic modules: setup, commit, evaluate, witness,
verification and Fiat-Shamir challenge derivation.

Covers:
- setup (lengths, power structure, determinism, degree rejection)
- commit (known polynomial, zero polynomial, linearity, degree overflow)
- evaluate (known values, agreement with commit in the exponent)
- generate_witness (eval_commit consistency, shifted SRS window, rejection)
- verify_evaluation (valid/invalid witnesses)
- derive_challenge (determinism, sensitivity to each commitment)
"""

import pytest
from kzg10.field import FR, G1, G2, ec_mul, ec_add, ec_pairing
from kzg10.errors import KZGError, InvalidDegree, DegreeExceedsSRS, MalformedInput
from kzg10.polynomial import to_fr_list, divide_by_linear
from kzg10.srs import CommitmentKey, setup
from kzg10.kzg import Witness, commit, evaluate, generate_witness, verify_evaluation
from kzg10.transcript import Transcript, derive_challenge


# ─────────────────────────────────────────────────────────────────────
# Setup Tests
# ─────────────────────────────────────────────────────────────────────

class TestSetup:
    """setup 테스트."""

    def test_g1_powers_length(self, key):
        """g1_powers length == t + 1."""
        assert key.G1_size() == 9

    def test_g2_powers_length(self, key):
        """g2_powers length == t + 1 (kept in full, only two are used)."""
        assert key.G2_size() == 9

    def test_gt_size(self, key):
        assert key.GT_size() == 1

    def test_powers_share_one_trapdoor(self, key):
        """e(g1[i+1], g2[0]) == e(g1[i], g2[1]) for every i."""
        for i in range(3):
            lhs = ec_pairing(key.g2_powers[0], key.g1_powers[i + 1])
            rhs = ec_pairing(key.g2_powers[1], key.g1_powers[i])
            assert lhs == rhs

    def test_generators_are_random(self, key):
        """Generators are sampled, not the standard bn128 generators."""
        assert key.g1_powers[0] != G1
        assert key.g2_powers[0] != G2

    def test_no_identity_powers(self, key):
        for i, pt in enumerate(key.g1_powers):
            assert pt is not None, f"g1_powers[{i}] is at infinity"

    def test_consecutive_powers_distinct(self, key):
        for i in range(key.G1_size() - 1):
            assert key.g1_powers[i] != key.g1_powers[i + 1]

    def test_trapdoor_not_stored(self, key):
        """The key exposes only the two power sequences."""
        assert set(vars(key)) == {"g1_powers", "g2_powers"}

    def test_deterministic_with_same_seed(self):
        assert setup(2, seed=99) == setup(2, seed=99)

    def test_different_seeds(self):
        assert setup(2, seed=1) != setup(2, seed=2)

    def test_random_setup(self):
        k1 = setup(1)
        k2 = setup(1)
        assert k1.G1_size() == 2
        assert k1 != k2

    def test_t_one(self):
        k = setup(1, seed=5)
        assert k.G1_size() == 2
        assert k.G2_size() == 2

    @pytest.mark.parametrize("t", [0, -3])
    def test_rejects_small_t(self, t):
        with pytest.raises(InvalidDegree):
            setup(t)

    @pytest.mark.parametrize("t", [2.5, "4", None, True])
    def test_rejects_non_int_t(self, t):
        with pytest.raises(InvalidDegree):
            setup(t)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            setup(0)

    def test_size_in_bits(self, key):
        assert key.size_in_bits() == 8 * (9 * 64 + 9 * 128)

    def test_powers_are_immutable_sequences(self, key):
        assert isinstance(key.g1_powers, tuple)
        assert isinstance(key.g2_powers, tuple)

    def test_empty_key_rejected(self):
        with pytest.raises(MalformedInput):
            CommitmentKey([], [G2])


# ─────────────────────────────────────────────────────────────────────
# Commit Tests
# ─────────────────────────────────────────────────────────────────────

class TestCommit:
    """commit 테스트."""

    def test_constant_polynomial(self, key):
        """commit([c]) == c·g1[0]."""
        assert commit(key, [FR(7)], 1) == ec_mul(key.g1_powers[0], FR(7))

    def test_linear_polynomial(self, key):
        """commit(a·x + b) == b·g1[0] + a·g1[1] (highest degree first)."""
        a, b = FR(3), FR(5)
        expected = ec_add(
            ec_mul(key.g1_powers[0], b),
            ec_mul(key.g1_powers[1], a),
        )
        assert commit(key, [a, b], 2) == expected

    def test_zero_polynomial(self, key):
        assert commit(key, to_fr_list([0, 0, 0]), 3) is None

    def test_accepts_int_coefficients(self, key):
        assert commit(key, [3, 1, 4, 1], 4) == commit(key, to_fr_list([3, 1, 4, 1]), 4)

    def test_reads_only_degree_coefficients(self, key):
        """Coefficients past `degree` are ignored."""
        p = to_fr_list([2, 9])
        assert commit(key, p + [FR(123)], 2) == commit(key, p, 2)

    def test_at_key_size(self, key):
        p = [FR(1)] + [FR(0)] * 8
        assert commit(key, p, key.G1_size()) == key.g1_powers[8]

    def test_degree_exceeds_srs(self, key):
        p = [FR(1)] * 10
        with pytest.raises(DegreeExceedsSRS):
            commit(key, p, 10)

    def test_degree_zero(self, key):
        with pytest.raises(InvalidDegree):
            commit(key, [FR(1)], 0)

    def test_short_polynomial(self, key):
        with pytest.raises(MalformedInput):
            commit(key, [FR(1), FR(2)], 3)

    def test_linearity(self, key):
        """commit(p + q) == commit(p) + commit(q)."""
        p = to_fr_list([1, 2, 3])
        q = to_fr_list([4, 5, 6])
        s = [a + b for a, b in zip(p, q)]
        assert commit(key, s, 3) == ec_add(commit(key, p, 3), commit(key, q, 3))

    def test_scalar_multiplication(self, key):
        p = to_fr_list([2, 3])
        assert commit(key, [c * FR(5) for c in p], 2) == ec_mul(commit(key, p, 2), FR(5))


# ─────────────────────────────────────────────────────────────────────
# Evaluate Tests
# ─────────────────────────────────────────────────────────────────────

class TestEvaluate:
    """evaluate 테스트."""

    def test_concrete(self):
        """3x^3 + x^2 + 4x + 1 at 2 == 37."""
        assert evaluate([3, 1, 4, 1], FR(2), 4) == FR(37)

    def test_at_zero_is_constant_term(self):
        assert evaluate(to_fr_list([9, 8, 42]), FR(0), 3) == FR(42)

    def test_at_one_is_coefficient_sum(self):
        assert evaluate(to_fr_list([1, 2, 3, 4]), FR(1), 4) == FR(10)

    def test_int_point(self):
        assert evaluate(to_fr_list([1, 0]), 5, 2) == FR(5)

    def test_matches_remainder(self):
        p = to_fr_list([7, 0, 3, 11, 2])
        z = FR(13)
        _, r = divide_by_linear(p, z)
        assert evaluate(p, z, 5) == r

    def test_wraps_modulus(self):
        """(r-1)·x at 2 == -2."""
        p = [FR(-1), FR(0)]
        assert evaluate(p, FR(2), 2) == FR(0) - FR(2)

    def test_zero_degree_is_empty_sum(self):
        assert evaluate([FR(1)], FR(2), 0) == FR(0)

    def test_negative_degree(self):
        with pytest.raises(InvalidDegree):
            evaluate([FR(1)], FR(2), -1)

    def test_short_polynomial(self):
        with pytest.raises(MalformedInput):
            evaluate([FR(1)], FR(2), 2)


# ─────────────────────────────────────────────────────────────────────
# Witness Tests
# ─────────────────────────────────────────────────────────────────────

class TestWitness:
    """generate_witness 테스트."""

    def test_eval_commit_consistency(self, key):
        """eval_commit == evaluate(p, z)·g1[0]."""
        p = to_fr_list([5, 0, 2, 8])
        z = FR(17)
        w = generate_witness(key, p, z, 4)
        assert w.eval_commit == ec_mul(key.g1_powers[0], evaluate(p, z, 4))

    def test_point_recorded(self, key):
        w = generate_witness(key, to_fr_list([1, 2]), 3, 2)
        assert w.point == FR(3)

    def test_quotient_uses_shifted_window(self, key):
        """For p = x - z the quotient is 1, committed as 1·g1[0]."""
        z = FR(6)
        w = generate_witness(key, [FR(1), FR(0) - z], z, 2)
        assert w.quotient_commit == key.g1_powers[0]
        assert w.eval_commit is None  # p(z) = 0

    def test_quotient_linear(self, key):
        """(x^2 + 1) at z=2: psi = x + 2 -> 2·g1[0] + 1·g1[1]."""
        w = generate_witness(key, to_fr_list([1, 0, 1]), FR(2), 3)
        expected = ec_add(ec_mul(key.g1_powers[0], 2), key.g1_powers[1])
        assert w.quotient_commit == expected
        assert w.eval_commit == ec_mul(key.g1_powers[0], 5)

    def test_constant_tail_gives_zero_quotient(self, key):
        """[0, c] is the constant c; its quotient is the zero polynomial."""
        w = generate_witness(key, to_fr_list([0, 4]), FR(9), 2)
        assert w.quotient_commit is None

    def test_does_not_mutate_input(self, key):
        p = to_fr_list([3, 1, 4, 1])
        before = list(p)
        generate_witness(key, p, FR(2), 4)
        assert p == before

    @pytest.mark.parametrize("degree", [0, 1])
    def test_degree_too_small(self, key, degree):
        with pytest.raises(InvalidDegree):
            generate_witness(key, [FR(1), FR(2)], FR(3), degree)

    def test_degree_exceeds_srs(self, key):
        with pytest.raises(DegreeExceedsSRS):
            generate_witness(key, [FR(1)] * 12, FR(3), 12)

    def test_short_polynomial(self, key):
        with pytest.raises(MalformedInput):
            generate_witness(key, [FR(1), FR(2)], FR(3), 4)

    def test_nonzero_remainder_rejected(self, key, monkeypatch):
        """A division that leaves a remainder is reported, never committed."""
        import kzg10.kzg as kzg_module

        def bad_division(poly, point):
            quotient, _ = divide_by_linear(poly, point)
            return quotient, FR(1)

        monkeypatch.setattr(kzg_module, "divide_by_linear", bad_division)
        with pytest.raises(KZGError):
            generate_witness(key, to_fr_list([3, 1, 4, 1]), FR(2), 4)

    def test_errors_share_base(self, key):
        with pytest.raises(KZGError):
            generate_witness(key, [FR(1)], FR(3), 1)

    def test_sizes(self, key):
        w = generate_witness(key, to_fr_list([1, 2]), FR(3), 2)
        assert w.G1_size() == 2
        assert w.size_in_bits() == 8 * 160


# ─────────────────────────────────────────────────────────────────────
# Verification Tests
# ─────────────────────────────────────────────────────────────────────

class TestVerify:
    """verify_evaluation 테스트."""

    def test_valid_quadratic(self, key):
        p = to_fr_list([1, 1, 1])
        C = commit(key, p, 3)
        assert verify_evaluation(key, C, generate_witness(key, p, FR(2), 3))

    def test_valid_at_zero(self, key):
        p = to_fr_list([5, 3, 42])
        C = commit(key, p, 3)
        assert verify_evaluation(key, C, generate_witness(key, p, FR(0), 3))

    def test_valid_full_degree(self, key):
        p = to_fr_list([1, 2, 3, 4, 5, 6, 7, 8, 9])
        C = commit(key, p, 9)
        assert verify_evaluation(key, C, generate_witness(key, p, FR(123456789), 9))

    def test_valid_zero_polynomial(self, key):
        """Identity commitment, identity eval and quotient still verify."""
        p = to_fr_list([0, 0, 0])
        C = commit(key, p, 3)
        assert verify_evaluation(key, C, generate_witness(key, p, FR(4), 3))

    def test_wrong_commitment(self, key):
        p = to_fr_list([1, 2, 3])
        q = to_fr_list([1, 2, 4])
        w = generate_witness(key, p, FR(5), 3)
        assert not verify_evaluation(key, commit(key, q, 3), w)

    def test_wrong_evaluation(self, key):
        p = to_fr_list([1, 2, 3])
        C = commit(key, p, 3)
        w = generate_witness(key, p, FR(5), 3)
        forged = Witness(w.point, ec_add(w.eval_commit, key.g1_powers[0]), w.quotient_commit)
        assert not verify_evaluation(key, C, forged)

    def test_key_without_g2_power(self, key):
        short = CommitmentKey(key.g1_powers, key.g2_powers[:1])
        w = generate_witness(key, to_fr_list([1, 2]), FR(3), 2)
        with pytest.raises(MalformedInput):
            verify_evaluation(short, commit(key, [FR(1), FR(2)], 2), w)


# ─────────────────────────────────────────────────────────────────────
# Challenge Tests
# ─────────────────────────────────────────────────────────────────────

class TestChallenge:
    """derive_challenge / Transcript 테스트."""

    @pytest.fixture
    def commitments(self, key):
        return (
            commit(key, to_fr_list([1, 2, 3]), 3),
            commit(key, to_fr_list([4, 5, 6]), 3),
            commit(key, to_fr_list([7, 8, 9]), 3),
        )

    def test_deterministic(self, commitments):
        assert derive_challenge(*commitments) == derive_challenge(*commitments)

    def test_returns_field_element(self, commitments):
        assert isinstance(derive_challenge(*commitments), FR)

    @pytest.mark.parametrize("index", [0, 1, 2])
    def test_sensitive_to_each_commitment(self, key, commitments, index):
        changed = list(commitments)
        changed[index] = ec_add(changed[index], key.g1_powers[0])
        assert derive_challenge(*changed) != derive_challenge(*commitments)

    def test_order_matters(self, commitments):
        a, b, c = commitments
        assert derive_challenge(a, b, c) != derive_challenge(b, a, c)

    def test_identity_commitments(self):
        assert derive_challenge(None, None, None) == derive_challenge(None, None, None)

    def test_distinct_across_many_triples(self):
        points = [ec_mul(G1, k) for k in range(1, 8)]
        seen = set()
        for i in range(len(points) - 2):
            z = derive_challenge(points[i], points[i + 1], points[i + 2])
            seen.add(int(z))
        assert len(seen) == len(points) - 2

    def test_transcript_chaining(self):
        t = Transcript()
        t.append_point(b"a", G1)
        first = t.challenge_scalar(b"z")
        second = t.challenge_scalar(b"z")
        assert first != second
