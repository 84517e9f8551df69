"""
FastAPI routers for all API endpoints.

Each module defines a router for one concern:
- recommendations: POST /recommendations (the pipeline)
- places: POST /places/lookup (center of the searched location)
- directions: POST /routes (loop route relay)
- health: GET /health
"""
