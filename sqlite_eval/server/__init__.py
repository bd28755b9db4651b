"""HTTP surface for a read-only database."""
