"""Generate delegating action mixins for test actors."""

__version__ = "0.1.0"
