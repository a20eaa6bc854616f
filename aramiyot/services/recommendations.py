"""
Map recommendation strings to display cards
"""
from typing import List, Optional

from ..models.resources import TipResource

MAX_CARDS = 3
TITLE_LIMIT = 60

DEFAULT_ACTIVITY_PROFILE = (
    "User is interested in mindfulness, healthy eating, and light yoga. "
    "Prefers short articles and guided meditations."
)


def build_activity_prompt(query: Optional[str] = None) -> str:
    """User activity text for the recommendation flow"""
    if query and query.strip():
        return (
            f"User is specifically interested in: {query.strip()}. "
            "Please provide wellness resources related to these topics."
        )
    return DEFAULT_ACTIVITY_PROFILE


def recommendations_to_resources(recommendations: List[str], query: Optional[str] = None) -> List[TipResource]:
    """
    Turn the first three recommendations into tip cards

    Args:
        recommendations: Flow output strings
        query: Search text the recommendations were made for, if any

    Returns:
        List of at most three TipResource cards
    """
    suffix = query.strip() if query and query.strip() else "initial"
    cards = []
    for index, text in enumerate(recommendations[:MAX_CARDS]):
        title = text[:TITLE_LIMIT - 3] + "..." if len(text) > TITLE_LIMIT else text
        cards.append(TipResource(
            id=f"PR{index + 1}-{suffix}",
            title=title,
            description=text,
            image_url="https://placehold.co/600x400.png",
            category="Personalized",
            data_ai_hint="wellness abstract",
        ))
    return cards
