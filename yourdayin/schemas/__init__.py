"""
Pydantic schemas for API request and response validation.

All FastAPI endpoints use strict Pydantic models with explicit types.
Wire names are camelCase where the map frontend expects them.
"""
