"""Medication reminder engine.

Reminders are never stored: every request derives upcoming dose occurrences
from the caller's active prescriptions, then hides the ones the caller has
dismissed. Only dismissals are persisted, and they expire on their own.
"""
