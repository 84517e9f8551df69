"""
AI Components for the YourDayIn backend.

1. Recommendation System (Single-shot LLM)
   - Uses Gemini to propose five points of interest for a searched place
   - NOT an ADK agent - uses the Google Gen AI SDK directly
   - Orchestration lives in: yourdayin/services/recommendation_service.py
"""

from yourdayin.agents.recommendation import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
    normalize_candidates,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_user_prompt",
    "normalize_candidates",
]
