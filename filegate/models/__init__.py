"""Pydantic models for the HTTP API."""
