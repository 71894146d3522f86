"""HTTP API for tire scout."""
