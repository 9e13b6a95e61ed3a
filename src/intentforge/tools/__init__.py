"""Command-line tooling for compiling intent definitions."""
