"""Settings, LLM clients and database connection."""
