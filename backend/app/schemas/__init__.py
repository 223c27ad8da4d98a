"""Pydantic request/response contracts, grouped by concern."""
