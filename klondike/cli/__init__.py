"""Command-line interface for the Klondike engine."""
