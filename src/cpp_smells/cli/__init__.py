"""Command-line interface for cpp-smells."""
