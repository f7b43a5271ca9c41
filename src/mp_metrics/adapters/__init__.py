"""Adapters – integrations with external systems (HTTP push gateway)."""
