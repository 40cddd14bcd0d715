"""HTTP surface for route requests."""
