"""Command-line interface for inspecting the metadata model."""
