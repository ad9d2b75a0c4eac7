"""HTTP API for TooDoo."""
