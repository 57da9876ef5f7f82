"""Adaptive symptom interview engine."""
