"""Tests for rmath.rng - uniform engines."""

import pytest
import numpy as np

from rmath import InvalidSeed, InvalidParameter, configure
from rmath.rng import (
    RNGKind,
    WichmannHill,
    MarsagliaMultiCarry,
    SuperDuper,
    MersenneTwister,
    KnuthTAOCP,
    KnuthTAOCP2002,
    LecuyerCMRG,
    create_rng,
    scramble,
    fixup,
)
from rmath.rng._kernels import KK, ran_array, ran_start_1997, ran_start_2002
from rmath.rng.knuth_taocp import _KnuthBase


SEED_LENGTHS = {
    RNGKind.WICHMANN_HILL: 3,
    RNGKind.MARSAGLIA_MULTICARRY: 2,
    RNGKind.SUPER_DUPER: 2,
    RNGKind.MERSENNE_TWISTER: 625,
    RNGKind.KNUTH_TAOCP: 101,
    RNGKind.KNUTH_TAOCP2002: 101,
    RNGKind.LECUYER_CMRG: 6,
}


class _Counter:
    """Stand-in dependent that counts invalidations."""

    def __init__(self):
        self.calls = 0

    def invalidate(self):
        self.calls += 1


# =============================================================================
# Known values
# =============================================================================

class TestMersenneTwisterReference:
    """Mersenne-Twister must match R's runif() bit for bit."""

    def test_seed_42(self):
        """set.seed(42); runif(3)"""
        np.testing.assert_allclose(
            MersenneTwister(42).unif_rand(3),
            [0.9148060435, 0.9370754133, 0.2861395348],
            atol=1e-9,
        )

    def test_seed_1(self):
        """set.seed(1); runif(3)"""
        np.testing.assert_allclose(
            MersenneTwister(1).unif_rand(3),
            [0.2655086631, 0.3721238966, 0.5728533633],
            atol=1e-9,
        )

    def test_seed_123(self):
        """set.seed(123); runif(1)"""
        assert MersenneTwister(123).internal_unif_rand() == pytest.approx(0.2875775201, abs=1e-9)

    def test_bulk_matches_single(self):
        """unif_rand(n) replays the same stream as n single draws."""
        rng = MersenneTwister(7)
        bulk = rng.unif_rand(1500)
        rng.init(7)
        single = np.array([rng.internal_unif_rand() for _ in range(1500)])
        np.testing.assert_array_equal(bulk, single)


class TestKnuthReference:
    """Knuth's published checks for ran_start / ran_array."""

    @staticmethod
    def _run(ran_start, calls, n):
        ran_x = np.zeros(KK, dtype=np.int64)
        aa = np.zeros(n, dtype=np.int64)
        ran_start(310952, ran_x)
        for _ in range(calls):
            ran_array(aa, n, ran_x)
        return ran_x, aa

    def test_2002_table(self):
        ran_x, _ = self._run(ran_start_2002, 2009, 1009)
        assert ran_x[0] == 995235265

    def test_2002_output_with_long_buffer(self):
        """Refilling 2009 words at a time lands on the same word."""
        _, aa = self._run(ran_start_2002, 1010, 2009)
        assert aa[0] == 995235265

    def test_1997_table(self):
        ran_x, _ = self._run(ran_start_1997, 2009, 1009)
        assert ran_x[0] == 461390032

    def test_knuth_base_is_abstract(self):
        with pytest.raises(TypeError):
            _KnuthBase(1)


class TestScramble:
    """Initial seed scrambling."""

    def test_scramble_is_50_lcg_rounds(self):
        seed = 42
        for _ in range(50):
            seed = (69069 * seed + 1) & 0xFFFFFFFF
        assert scramble(42) == seed

    def test_fixup_bounds(self):
        assert 0.0 < fixup(0.0) < 1e-9
        assert 1.0 - 1e-9 < fixup(1.0) < 1.0
        assert fixup(0.25) == 0.25


# =============================================================================
# Contract shared by all engines
# =============================================================================

class TestEngineContract:
    """Every engine honours the IRNG contract."""

    def test_seed_length(self, engine):
        assert len(engine.seed) == SEED_LENGTHS[engine.kind]
        assert engine.n_seed == SEED_LENGTHS[engine.kind]

    def test_reseed_reproduces(self, engine):
        """init(seed) replays the stream."""
        first = engine.unif_rand(250)
        engine.init(1234)
        np.testing.assert_array_equal(engine.unif_rand(250), first)

    def test_seed_roundtrip(self, engine):
        """Writing back a saved seed vector resumes from that point."""
        engine.unif_rand(17)
        saved = engine.seed
        ahead = engine.unif_rand(150)
        engine.seed = saved
        np.testing.assert_array_equal(engine.unif_rand(150), ahead)

    def test_seed_words_are_unsigned(self, engine):
        words = engine.seed
        assert all(isinstance(w, int) for w in words)
        assert all(0 <= w <= 0xFFFFFFFF for w in words)

    def test_different_seeds_differ(self, engine):
        a = engine.unif_rand(20)
        engine.init(4321)
        b = engine.unif_rand(20)
        assert not np.array_equal(a, b)

    def test_n_below_one_gives_one_draw(self, engine):
        assert engine.unif_rand(0).shape == (1,)
        assert engine.unif_rand(-3).shape == (1,)
        assert engine.unif_rand(0.5).shape == (1,)
        assert engine.unif_rand(2.7).shape == (2,)

    def test_wrong_seed_length(self, engine):
        with pytest.raises(InvalidSeed):
            engine.seed = [1] * (engine.n_seed + 1)

    def test_out_of_range_word(self, engine):
        words = engine.seed
        words[-1] = 1 << 32
        with pytest.raises(InvalidSeed):
            engine.seed = words

    def test_non_integer_word(self, engine):
        words = engine.seed
        words[-1] = 1.5
        with pytest.raises(InvalidSeed):
            engine.seed = words

    def test_non_integer_seed(self, engine):
        with pytest.raises(InvalidSeed):
            engine.init("abc")

    def test_dependents_invalidated(self, engine):
        """init() and seed writes notify attached dependents."""
        dep = _Counter()
        engine.attach(dep)
        engine.init(99)
        assert dep.calls == 1
        engine.seed = engine.seed
        assert dep.calls == 2

    def test_name_and_repr(self, engine):
        assert engine.name == engine.kind.label
        assert engine.name in repr(engine)

    @pytest.mark.slow
    def test_draws_strictly_inside_unit_interval(self, engine):
        u = engine.unif_rand(1_000_000)
        assert np.all(u > 0.0)
        assert np.all(u < 1.0)
        assert abs(u.mean() - 0.5) < 0.002


# =============================================================================
# Seed fix-ups
# =============================================================================

class TestFixups:
    """Kind-specific repair or rejection of user seed vectors."""

    def test_wichmann_hill_reduces_and_replaces_zero(self):
        rng = WichmannHill(1)
        rng.seed = [30269, 5, 30323 * 2]
        assert rng.seed == [1, 5, 1]

    def test_marsaglia_zero_seed(self):
        """An all-zero seed is fixed up to a non-zero, advancing state."""
        rng = MarsagliaMultiCarry(1)
        rng.seed = [0, 0]
        assert rng.seed == [1, 1]
        draws = rng.unif_rand(5)
        assert len(set(draws)) == 5
        assert rng.seed != [1, 1]

    def test_super_duper_forces_odd(self):
        rng = SuperDuper(1)
        rng.seed = [0, 2]
        assert rng.seed == [1, 3]

    def test_negative_words_are_twos_complement(self):
        rng = SuperDuper(1)
        rng.seed = [-1, 5]
        assert rng.seed == [0xFFFFFFFF, 5]

    def test_mersenne_all_zero_rejected(self):
        rng = MersenneTwister(1)
        with pytest.raises(InvalidSeed):
            rng.seed = [624] + [0] * 624

    def test_mersenne_position_reset(self):
        rng = MersenneTwister(1)
        words = rng.seed
        words[0] = 0
        rng.seed = words
        assert rng.seed[0] == 624

    def test_knuth_all_zero_rejected(self):
        rng = KnuthTAOCP(1)
        with pytest.raises(InvalidSeed):
            rng.seed = [0] * 100 + [100]

    def test_knuth_word_too_large(self):
        rng = KnuthTAOCP2002(1)
        words = rng.seed
        words[0] = 1 << 30
        with pytest.raises(InvalidSeed):
            rng.seed = words

    def test_knuth_position_reset(self):
        rng = KnuthTAOCP2002(1)
        words = rng.seed
        words[100] = 0
        rng.seed = words
        assert rng.seed[100] == 100

    def test_knuth_variants_differ(self):
        assert not np.array_equal(KnuthTAOCP(5).unif_rand(10), KnuthTAOCP2002(5).unif_rand(10))

    def test_lecuyer_zero_triple_rejected(self):
        rng = LecuyerCMRG(1)
        with pytest.raises(InvalidSeed):
            rng.seed = [0, 0, 0, 1, 2, 3]
        with pytest.raises(InvalidSeed):
            rng.seed = [1, 2, 3, 0, 0, 0]

    def test_lecuyer_word_above_modulus(self):
        rng = LecuyerCMRG(1)
        with pytest.raises(InvalidSeed):
            rng.seed = [4294967087, 1, 1, 1, 1, 1]

    def test_lecuyer_seeding_stays_below_m2(self):
        for seed in range(20):
            assert all(w < 4294944443 for w in LecuyerCMRG(seed).seed)


# =============================================================================
# Factory
# =============================================================================

class TestCreateRng:
    """create_rng factory."""

    @pytest.mark.parametrize("kind,cls", [
        ("Wichmann-Hill", WichmannHill),
        ("marsaglia_multicarry", MarsagliaMultiCarry),
        (RNGKind.SUPER_DUPER, SuperDuper),
        (3, MersenneTwister),
        ("KNUTH_TAOCP", KnuthTAOCP),
        ("Knuth-TAOCP-2002", KnuthTAOCP2002),
        ("L'Ecuyer-CMRG", LecuyerCMRG),
    ])
    def test_by_name_enum_or_code(self, kind, cls):
        assert isinstance(create_rng(kind, seed=1), cls)

    def test_unknown_kind(self):
        with pytest.raises(InvalidParameter):
            create_rng("Not-A-Generator")
        with pytest.raises(InvalidParameter):
            create_rng(17)

    def test_default_kind_follows_config(self):
        assert isinstance(create_rng(seed=1), MersenneTwister)
        configure(rng_kind="Wichmann-Hill")
        assert isinstance(create_rng(seed=1), WichmannHill)

