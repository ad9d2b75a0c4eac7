"""Persistence for TooDoo."""
