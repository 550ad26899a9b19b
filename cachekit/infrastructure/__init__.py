"""
Infrastructure Layer

Concrete adapters for the core protocols: cache backends and metrics sinks.
"""
