"""Pydantic models for interview state and API messages."""
