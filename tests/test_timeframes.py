"""Unit tests for utils.timeframes."""

import pytest
from aster_bot.utils.timeframes import timeframe_minutes


def test_timeframe_minutes():
    assert timeframe_minutes("5m") == 5
    assert timeframe_minutes("1h") == 60
    assert timeframe_minutes("1d") == 1440
    assert timeframe_minutes("1w") == 10080


@pytest.mark.parametrize("tf", ["1x", "m", "", "abc"])
def test_timeframe_invalid(tf):
    with pytest.raises(ValueError):
        timeframe_minutes(tf)
