"""Infrastructure services - provider adapters over the connectors."""
