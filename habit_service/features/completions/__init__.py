"""Habit completion log and statistics."""
