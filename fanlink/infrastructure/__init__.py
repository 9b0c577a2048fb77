"""Infrastructure layer - external catalogs, storage and delivery surfaces."""
