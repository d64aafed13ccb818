"""Ingestion layer.

This package contains adapters that receive raw host payloads and provider
answers and emit normalized domain objects/events.
"""

__all__: list[str] = []
