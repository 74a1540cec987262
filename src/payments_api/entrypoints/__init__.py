"""Entrypoints layer - Delivery mechanisms.

This layer contains:
- API: HTTP endpoints (FastAPI routes, pydantic schemas, error mapping)

Entrypoints translate external requests into use case calls
and format responses for the delivery mechanism.
"""
