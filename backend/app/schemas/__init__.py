"""Pydantic Schemas — wire contracts for the names and geolocations endpoints.

Invariants:
    - Payloads are validated here, at the HTTP boundary, before binding
    - Responses are camelCase projections of ORM rows, never ORM rows themselves
"""
