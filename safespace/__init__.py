"""SafeSpace: anonymous mental-health support platform."""

__version__ = "1.0.0"
