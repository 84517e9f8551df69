"""
Recommendation System Prompt Templates

Contains the system prompt and user prompt builder for the place
recommendation pipeline.

Architecture:
- Pattern: Single-shot LLM call (no tools, no grounding)
- Model: Gemini 2.5 Flash (settings.GEMINI_MODEL)
- Temperature: 0.7 (some variety between searches of the same place)
- Output: JSON requested via response_mime_type, still normalized from text
  because the model may wrap it in code fences or an object

Prompt Engineering Pattern:
- System prompt defines the tour-guide role and the raw-JSON rule
- User prompt carries the location, the field list and the output schema
"""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

RECOMMENDATION_SYSTEM_PROMPT = """You are a professional tour guide with extensive knowledge of global tourist destinations.

<role>
You recommend the must-visit tourist attractions and emblematic places of a
given area. You always use official place names and the most precise address
you know, because every place you name will be geocoded and drawn on a map.
</role>

<output_format>
You MUST respond with raw JSON only.
No markdown formatting, no code blocks, no explanations before or after the JSON.
</output_format>"""


# =============================================================================
# USER PROMPT BUILDER
# =============================================================================

def build_recommendation_user_prompt(location: str, count: int = 5) -> str:
    """
    Build the user prompt asking for ``count`` places in ``location``.

    Args:
        location: Place the user searched for (e.g. "Paris")
        count: Number of places to request (5 in production)

    Returns:
        str: Formatted user prompt ready to be sent to Gemini
    """
    return f"""Act as a professional tour guide for {location}.
Provide exactly {count} must-visit tourist attractions or emblematic places in this area.

<location>
{location}
</location>

<instructions>
For each place, include:
1. Name of the place (be specific and accurate with the official name)
2. A brief description (2-3 sentences)
3. Address or location (be as specific and accurate as possible with the full address)
4. Recommended time to spend there
5. A helpful tip for visitors
</instructions>

<output_schema>
Return a JSON array with exactly {count} objects of this shape:
[
  {{
    "name": "Place name",
    "description": "Brief description",
    "address": "Address or location",
    "recommendedTime": "e.g., 1-2 hours",
    "tips": "A helpful tip"
  }}
]
</output_schema>

IMPORTANT: Return ONLY the raw JSON array without any markdown formatting, code blocks, or additional text."""
