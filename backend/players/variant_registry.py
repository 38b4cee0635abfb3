"""
Registry for arena player variants.

Maps variant keys (e.g., 'heuristic', 'random') to player classes. To add a
variant, create a Player subclass, import it here, and add an entry to
PLAYER_VARIANTS.
"""

from typing import Dict, List, Optional, Type

from .base import Player
from .heuristic_player import HeuristicPlayer
from .pathfinder_player import PathfinderPlayer
from .random_player import RandomPlayer


PLAYER_VARIANTS: Dict[str, Type[Player]] = {
    "heuristic": HeuristicPlayer,
    "pathfinder": PathfinderPlayer,
    "random": RandomPlayer,
}

DEFAULT_VARIANT = "heuristic"

# Canonical list of available variant keys
AVAILABLE_VARIANTS = list(PLAYER_VARIANTS.keys())


def get_player_class(variant_key: Optional[str] = None) -> Type[Player]:
    """
    Get the player class for a given variant key.

    Args:
        variant_key: One of 'heuristic', 'pathfinder', 'random'. If None or
            empty, returns the default.

    Returns:
        The player class (subclass of Player).

    Raises:
        ValueError: If variant_key is not recognized.
    """
    if not variant_key or variant_key.strip() == "":
        variant_key = DEFAULT_VARIANT

    variant_key = variant_key.strip().lower()

    if variant_key not in PLAYER_VARIANTS:
        available = ", ".join(AVAILABLE_VARIANTS)
        raise ValueError(
            f"Unknown player variant '{variant_key}'. Available variants: {available}"
        )

    return PLAYER_VARIANTS[variant_key]


def list_variants() -> List[Dict[str, str]]:
    """
    Return metadata about all available player variants.

    Returns:
        List of dicts with 'key' and 'description' for each variant.
    """
    return [
        {"key": "heuristic", "description": "Stateful food/survival/aggression scorer with opponent tracking"},
        {"key": "pathfinder", "description": "BFS shortest path to the nearest apple"},
        {"key": "random", "description": "Random move that avoids walls and its own body"},
    ]
