"""Session storage and interview orchestration services."""
