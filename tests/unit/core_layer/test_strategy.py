"""
Unit Tests for Cache Strategies
"""

import pytest

from cachekit.core.exceptions import ValidationError
from cachekit.core.strategy import CacheStrategy


@pytest.mark.unit
class TestCacheStrategy:
    """Test suite for CacheStrategy."""

    def test_members(self):
        """Test that exactly four strategies exist."""
        assert [s.value for s in CacheStrategy] == ["fresh", "refresh", "invalidate", "bypass"]

    def test_str(self):
        """Test that str() renders the value for log fields."""
        assert str(CacheStrategy.INVALIDATE) == "invalidate"

    @pytest.mark.parametrize("name", ["REFRESH", "refresh", " Refresh "])
    def test_parse_case_insensitive(self, name):
        """Test that names parse regardless of case and surrounding whitespace."""
        assert CacheStrategy.parse(name) is CacheStrategy.REFRESH

    def test_parse_member_passthrough(self):
        """Test that members parse to themselves."""
        assert CacheStrategy.parse(CacheStrategy.BYPASS) is CacheStrategy.BYPASS

    def test_parse_unknown_raises(self):
        """Test that unknown names raise ValidationError listing valid names."""
        with pytest.raises(ValidationError) as exc_info:
            CacheStrategy.parse("sometimes")

        assert exc_info.value.details["valid"] == ["fresh", "refresh", "invalidate", "bypass"]
