"""
Core utilities — shared exceptions and cross-cutting concerns.

Used by ingestion, the API server and the CLI.
"""
