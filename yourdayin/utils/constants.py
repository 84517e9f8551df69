"""
Constants shared by the recommendation pipeline.

Default texts are substituted for candidate fields the model left out, so
every recommendation sent to the map/card UI has displayable strings.
"""

# Hard cap on how many recommendations a single search returns
MAX_RECOMMENDATIONS = 5

# Offset step (degrees) for synthetic coordinates: center + (i + 1) * step
FALLBACK_OFFSET_STEP = 0.005

# Larger offset step for the final safety net pass: center + i * step
SAFETY_NET_OFFSET_STEP = 0.01

CANDIDATE_DEFAULTS = {
    'name': 'Unknown Place',
    'description': 'No description available',
    'address': 'No address available',
    'recommended_time': '1 hour',
    'tips': 'No tips available',
}

# Routes shorter than this (meters) are shown as walkable
WALKABLE_DISTANCE_METERS = 5000
