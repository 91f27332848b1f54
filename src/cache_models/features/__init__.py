"""Features of cache-models."""
