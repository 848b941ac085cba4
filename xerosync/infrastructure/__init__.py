"""Infrastructure layer: database, event bus, Xero adapter."""
