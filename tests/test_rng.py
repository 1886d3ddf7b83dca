"""Unit tests for the seeded generator."""

import pytest

from pixelseed.rng import DeterministicGenerator, new_generator


def draw(gen):
    return [gen.gen_range(0, 1000) for _ in range(20)]


class TestDeterminism:

    def test_same_seed_same_sequence(self, zero_seed):
        assert draw(new_generator(zero_seed)) == draw(new_generator(zero_seed))

    def test_different_seed_different_sequence(self, zero_seed, other_seed):
        assert draw(new_generator(zero_seed)) != draw(new_generator(other_seed))

    def test_read_is_reproducible(self, other_seed):
        a, b = new_generator(other_seed), new_generator(other_seed)
        assert a.read(64) == b.read(64)

    def test_draw_order_matters(self, other_seed):
        a, b = new_generator(other_seed), new_generator(other_seed)
        b.gen_bool(0.5)
        assert draw(a) != draw(b)


class TestGenRange:

    def test_within_bounds(self, other_seed):
        gen = new_generator(other_seed)
        values = [gen.gen_range(3, 7) for _ in range(500)]
        assert min(values) >= 3
        assert max(values) < 7
        assert set(values) == {3, 4, 5, 6}

    def test_returns_int(self, zero_seed):
        assert type(new_generator(zero_seed).gen_range(0, 10)) is int

    @pytest.mark.parametrize("lo,hi", [(5, 5), (6, 2)])
    def test_empty_range(self, zero_seed, lo, hi):
        with pytest.raises(ValueError):
            new_generator(zero_seed).gen_range(lo, hi)


class TestGenBool:

    def test_extremes(self, zero_seed):
        gen = new_generator(zero_seed)
        assert all(gen.gen_bool(1.0) for _ in range(100))
        assert not any(gen.gen_bool(0.0) for _ in range(100))

    def test_returns_bool(self, zero_seed):
        assert type(new_generator(zero_seed).gen_bool(0.5)) is bool

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_invalid_probability(self, zero_seed, p):
        with pytest.raises(ValueError):
            new_generator(zero_seed).gen_bool(p)


def test_read_length(zero_seed):
    assert len(new_generator(zero_seed).read(17)) == 17


def test_seed_length_checked():
    with pytest.raises(ValueError):
        DeterministicGenerator(b"short")
