"""Commerce order to Xero invoice synchronization."""

__version__ = "1.0.0"
