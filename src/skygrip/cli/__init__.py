"""Command line interface for Skygrip."""
