"""Library catalog service: books, titles, ISBNs and availability."""

__version__ = "1.0.0"
