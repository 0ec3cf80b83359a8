"""Phrase banks: the pool normal games draw from and the fixed tutorial script."""

import random
from typing import Optional

DEFAULT_PHRASES = (
    "Riding a bicycle",
    "Brushing your teeth",
    "Walking the dog",
    "Baking a cake",
    "Playing the guitar",
    "Climbing a mountain",
    "Changing a flat tire",
    "Swimming with sharks",
    "Flying a kite",
    "Taking a selfie",
    "Building a snowman",
    "Juggling",
    "Doing yoga",
    "Catching a fish",
    "Conducting an orchestra",
    "Skateboarding",
    "Painting a fence",
    "Surfing",
    "Riding a roller coaster",
    "Hailing a taxi",
    "Sneezing",
    "Making a pizza",
    "Walking a tightrope",
    "Milking a cow",
    "Blowing up a balloon",
)

# Card 1 is the swipe-to-pass card; the last card ends the tutorial
TUTORIAL_PHRASES = (
    "Tap to score",
    "Swipe forward to pass",
    "Tap or swipe to finish",
)


def sample_phrases(
    count: int,
    bank: tuple[str, ...] = DEFAULT_PHRASES,
    seed: Optional[int] = None,
) -> list[str]:
    """Pick `count` distinct phrases in random order (all of them if the bank is smaller)."""
    rng = random.Random(seed)
    return rng.sample(list(bank), min(count, len(bank)))
