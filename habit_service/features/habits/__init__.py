"""Habit catalogue."""
