"""Pydantic schemas for statements, comparisons and API payloads."""
