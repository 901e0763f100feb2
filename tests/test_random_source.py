"""
Unit tests for randomness sources.
"""

from collections import Counter
from unittest.mock import patch

import pytest
from scipy.stats import chisquare

from passgen.utils.random_source import (
    SeededRandomSource,
    SystemRandomSource,
    get_random_source,
)


class TestSystemRandomSource:
    """Test the OS-backed source."""

    def test_values_in_range(self):
        """Test that draws stay within bounds."""
        source = SystemRandomSource()
        for bound in [1, 2, 7, 86, 1000]:
            for _ in range(100):
                assert 0 <= source.next_below(bound) < bound

    def test_invalid_bound(self):
        """Test that non-positive bounds are rejected."""
        source = SystemRandomSource()
        with pytest.raises(ValueError):
            source.next_below(0)

    def test_random_bytes(self):
        """Test random byte generation."""
        source = SystemRandomSource()
        data = source.random_bytes(32)

        assert isinstance(data, bytes)
        assert len(data) == 32
        assert source.random_bytes(32) != data

    def test_default_source(self):
        """Test that production wiring uses the system source."""
        assert isinstance(get_random_source(), SystemRandomSource)

    @patch("secrets.randbelow", side_effect=OSError("entropy source unavailable"))
    def test_os_failure_propagates(self, mock_randbelow):
        """Test that OS source failures are not silently replaced."""
        with pytest.raises(OSError):
            SystemRandomSource().next_below(10)


class TestSeededRandomSource:
    """Test the deterministic source used in tests."""

    def test_reproducible(self):
        """Test that equal seeds give equal streams."""
        a = SeededRandomSource(b"abc")
        b = SeededRandomSource(b"abc")

        assert [a.next_below(100) for _ in range(50)] == [b.next_below(100) for _ in range(50)]

    def test_different_seeds_differ(self):
        """Test that different seeds give different streams."""
        a = SeededRandomSource(b"abc")
        b = SeededRandomSource(b"xyz")

        assert a.random_bytes(32) != b.random_bytes(32)

    def test_rejection_sampling(self):
        """Test that draws above the largest multiple of the bound are retried."""
        source = SeededRandomSource()
        words = [b"\xff\xff\xff\xff", (5).to_bytes(4, "big")]

        # 2**32 % 3 == 1, so 0xffffffff is the single rejected value for bound 3
        with patch.object(source, "random_bytes", side_effect=words) as mock_bytes:
            assert source.next_below(3) == 2

        assert mock_bytes.call_count == 2

    def test_uniform(self):
        """Test that draws over a small bound are uniform."""
        source = SeededRandomSource(b"uniform")
        counts = Counter(source.next_below(7) for _ in range(14_000))

        result = chisquare([counts[i] for i in range(7)])
        assert result.pvalue > 1e-4

    def test_bound_limits(self):
        """Test rejected bounds."""
        source = SeededRandomSource()
        with pytest.raises(ValueError):
            source.next_below(0)
        with pytest.raises(ValueError):
            source.next_below((1 << 32) + 1)


class TestSourceHelpers:
    """Test choice and shuffle built on next_below."""

    def test_choice(self):
        """Test choosing from a sequence."""
        source = SeededRandomSource()
        for _ in range(50):
            assert source.choice("abc") in "abc"

    def test_choice_empty(self):
        """Test that choosing from nothing fails."""
        with pytest.raises(IndexError):
            SeededRandomSource().choice("")

    def test_shuffle_is_permutation(self):
        """Test that shuffling keeps the same elements."""
        source = SeededRandomSource(b"perm")
        items = list(range(20))
        source.shuffle(items)

        assert sorted(items) == list(range(20))
        assert items != list(range(20))

    def test_shuffle_is_uniform(self):
        """Test that all orderings of three items are equally likely."""
        source = SeededRandomSource(b"orderings")
        counts = Counter()
        for _ in range(6000):
            items = ["a", "b", "c"]
            source.shuffle(items)
            counts["".join(items)] += 1

        assert len(counts) == 6
        assert chisquare(list(counts.values())).pvalue > 1e-4
