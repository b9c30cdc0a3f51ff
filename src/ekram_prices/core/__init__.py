"""Core domain: entities, catalog, interfaces and services."""
