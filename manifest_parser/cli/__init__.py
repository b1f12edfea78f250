"""Command implementations for the manifest-parser CLI."""
