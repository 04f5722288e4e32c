"""Round-robin cricket league engine: fixtures, standings, playoffs and forecasts."""

__version__ = "0.1.0"
