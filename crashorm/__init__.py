"""Async PostgreSQL query builder: entities, columns, conditions, queries, batch statements and relations."""

__version__ = "0.1.0"