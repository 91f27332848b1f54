"""Core building blocks shared by every cache-models feature."""
