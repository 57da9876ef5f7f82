"""Reasoning oracle contract and LLM adapter."""
