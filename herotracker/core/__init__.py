"""Core calculation engine, models and readers."""
