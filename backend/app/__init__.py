"""Issue tracker HTTP API."""
