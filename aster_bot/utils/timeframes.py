"""Timeframe string conversion."""


def timeframe_minutes(tf: str) -> int:
    """Convert kline interval (e.g. '5m', '1h', '1d', '1w') to minutes."""
    tf = tf.strip().lower()
    if len(tf) < 2 or not tf[:-1].isdigit():
        raise ValueError(f"Unsupported timeframe: {tf}")
    n = int(tf[:-1])
    unit = tf[-1]
    if unit == "m":
        return n
    if unit == "h":
        return n * 60
    if unit == "d":
        return n * 60 * 24
    if unit == "w":
        return n * 60 * 24 * 7
    raise ValueError(f"Unsupported timeframe: {tf}")
