"""Core verification, import, and completeness logic."""
