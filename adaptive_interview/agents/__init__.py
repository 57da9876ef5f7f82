"""LangGraph interview turn workflow and oracle prompts."""
