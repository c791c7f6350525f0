"""Service base classes."""
