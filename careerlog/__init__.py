"""Player career history and injury scraping."""

__version__ = "0.3.0"
