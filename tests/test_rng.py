"""Tests for deterministic keyed random streams."""

import pytest

from hexplore.rng import RIVER_NAMESPACE, key_to_seed, stream_for


def draws(stream, n: int = 10) -> list[float]:
    return [stream.random() for _ in range(n)]


class TestStreamFor:
    """Tests for stream derivation from keys."""

    def test_identical_keys_identical_sequences(self):
        """Identical keys give identical draws."""
        a = stream_for("test-1", 3, 0, 1, -2)
        b = stream_for("test-1", 3, 0, 1, -2)
        assert draws(a) == draws(b)

    def test_values_in_unit_interval(self):
        """Draws lie in [0, 1)."""
        values = draws(stream_for("seed", 0, 0, 0, 0), 500)
        assert all(0.0 <= v < 1.0 for v in values)

    @pytest.mark.parametrize(
        "other",
        [
            ("test-2", 3, 0, 1, -2),
            ("test-1", 4, 0, 1, -2),
            ("test-1", 3, 1, 1, -2),
            ("test-1", 3, 0, 2, -2),
            ("test-1", 3, 0, 1, -1),
        ],
    )
    def test_each_component_changes_stream(self, other: tuple):
        """Changing any key component changes the stream."""
        base = draws(stream_for("test-1", 3, 0, 1, -2))
        assert draws(stream_for(*other)) != base

    def test_no_concatenation_ambiguity(self):
        """Adjacent components cannot run together."""
        assert key_to_seed("a1", 1, 0, 0, 0) != key_to_seed("a", 11, 0, 0, 0)
        assert key_to_seed("x", 1, 23, 0, 0) != key_to_seed("x", 12, 3, 0, 0)
        assert key_to_seed("x", 0, 0, 1, 23) != key_to_seed("x", 0, 0, 12, 3)

    def test_namespace_separates_streams(self):
        """River draws are independent of tile draws."""
        tile = draws(stream_for("s", 1, 0, 0, 0))
        river = draws(stream_for("s", 1, 0, 0, 0, namespace=RIVER_NAMESPACE))
        assert tile != river

    def test_seed_fits_64_bits(self):
        """Seeds are unsigned 64-bit integers."""
        seed = key_to_seed("anything", 99, 7, -5, 5)
        assert 0 <= seed < 2**64

    def test_known_seeds(self):
        """Seeds are stable across processes and releases."""
        assert key_to_seed("test-1", 1, 0, 1, 0) == 13720211687862109051
        river = key_to_seed("test-1", 1, 0, 1, 0, namespace=RIVER_NAMESPACE)
        assert river == 3442439919389563978

    def test_known_draws(self):
        """First draws of a known key through numpy's PCG64."""
        stream = stream_for("test-1", 1, 0, 1, 0)
        assert stream.random() == 0.6150717864664508
        assert stream.permutation(list(range(9))) == [2, 0, 5, 8, 7, 4, 3, 1, 6]


class TestRandomStream:
    """Tests for stream helpers."""

    def test_permutation_is_reordering(self):
        """Permutation keeps every element once."""
        items = list("abcdefghi")
        result = stream_for("p", 0, 0, 0, 0).permutation(items)
        assert sorted(result) == items

    def test_permutation_reproducible(self):
        """Permutation is reproducible per key."""
        items = list(range(9))
        assert (
            stream_for("p", 1, 2, 3, 4).permutation(items)
            == stream_for("p", 1, 2, 3, 4).permutation(items)
        )

    def test_choice_member(self):
        """choice returns a member of the sequence."""
        stream = stream_for("c", 0, 0, 0, 0)
        for _ in range(20):
            assert stream.choice(["x", "y", "z"]) in {"x", "y", "z"}

    def test_choice_empty(self):
        """choice on an empty sequence raises ValueError."""
        with pytest.raises(ValueError):
            stream_for("c", 0, 0, 0, 0).choice([])

    def test_integers_range(self):
        """integers stays within [0, n)."""
        stream = stream_for("i", 0, 0, 0, 0)
        assert all(0 <= stream.integers(6) < 6 for _ in range(50))

    def test_integers_rejects_empty_range(self):
        """integers rejects n <= 0."""
        with pytest.raises(ValueError):
            stream_for("i", 0, 0, 0, 0).integers(0)
