"""Core: configuration, domain, interfaces and the lifecycle services.

The core knows nothing about HTTP or the CLI.
"""
