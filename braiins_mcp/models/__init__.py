"""Pydantic models for tool inputs and API responses."""
