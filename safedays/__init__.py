"""
SafeDays cycle engine.

Derives daily cycle phases, upcoming milestones and a self-correcting
average cycle length from a handful of user-entered dates.
"""
__version__ = "0.1.0"
