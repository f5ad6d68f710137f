"""Adapters: concrete HTTP client and local state persistence."""
