"""Habit tracking service exposing REST and GraphQL APIs over Firestore."""

__version__ = "1.0.0"
