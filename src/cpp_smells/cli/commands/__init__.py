"""CLI commands for cpp-smells."""
