"""Finance dashboard aggregation and currency normalization core."""
