"""Rule-based interview engine: pure functions over session state."""
