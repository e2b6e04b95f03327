"""Personal trading journal with performance and consistency analytics."""

__version__ = "0.1.0"
