"""Core infrastructure: exceptions and the source content store."""
