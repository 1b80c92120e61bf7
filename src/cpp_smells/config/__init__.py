"""Configuration: severity thresholds and discovery defaults."""
