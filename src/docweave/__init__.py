"""docweave - static documentation sites from markdown navigation trees."""

__version__ = "0.1.0"
