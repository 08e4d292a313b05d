"""Command line interface for VersionMatrix."""
