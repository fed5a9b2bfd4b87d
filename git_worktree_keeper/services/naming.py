"""Random branch names like ``swift-fox-42``."""

import random
from typing import List, Optional

ADJECTIVES: List[str] = [
    "swift", "quick", "bright", "calm", "clever", "cool", "crisp", "eager",
    "fast", "fresh", "keen", "light", "neat", "prime", "sharp", "silent",
    "smooth", "steady", "warm", "bold", "brave", "clear", "fleet", "golden",
    "agile", "nimble", "rapid", "blazing", "cosmic",
]

NOUNS: List[str] = [
    "fox", "wolf", "bear", "hawk", "lion", "tiger", "raven", "eagle",
    "falcon", "otter", "cedar", "maple", "oak", "pine", "willow", "river",
    "stream", "brook", "delta", "canyon", "spark", "flame", "ember", "comet",
    "meteor", "nova", "pulse", "wave", "drift", "glow",
]


def generate_name(rng: Optional[random.Random] = None) -> str:
    """Pick an adjective, a noun and a number below 100, joined by hyphens.

    Not unique: callers check the branch does not exist yet.
    """
    rng = rng or random
    return f"{rng.choice(ADJECTIVES)}-{rng.choice(NOUNS)}-{rng.randrange(100)}"
