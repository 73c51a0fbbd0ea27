"""Personal economy tracker: monthly financial records and summaries."""

__version__ = "0.1.0"
