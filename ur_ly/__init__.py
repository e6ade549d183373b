"""UR-ly: Slack alerts when rooms open up in watched UR rental properties."""

__version__ = "0.1.0"
