"""HTTP API for the Campus Board service."""
