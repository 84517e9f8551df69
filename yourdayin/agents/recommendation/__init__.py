"""
Recommendation System - Single-shot LLM + geocoding

This module contains the prompt templates and the response normalizer for
the Gemini-based place recommendation pipeline.

Architecture:
- Pattern: Single-shot LLM (one Gemini call per search)
- Model: Gemini 2.5 Flash
- Output: JSON array parsed from text (normalizer tolerates fences/prose)

The orchestration (Gemini call, normalization, geocoding) is in:
- yourdayin/services/recommendation_service.py
"""

from yourdayin.agents.recommendation.normalizer import (
    normalize_candidates,
    strip_code_fences,
)
from yourdayin.agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)

__all__ = [
    "RECOMMENDATION_SYSTEM_PROMPT",
    "build_recommendation_user_prompt",
    "normalize_candidates",
    "strip_code_fences",
]
