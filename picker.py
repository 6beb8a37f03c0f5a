import random
from collections.abc import Sequence
from typing import Optional

from models import Film


def pick_film(films: Sequence[Film], rng: Optional[random.Random] = None) -> Film:
    """Pick one film uniformly at random."""
    if not films:
        raise ValueError("cannot pick from an empty watchlist")
    return (rng or random).choice(films)
