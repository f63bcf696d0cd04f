"""
Word banks and difficulty mixes.

A word bank splits its words into three difficulty groups (g1 easiest,
g3 hardest). Each stage asks for a bag of words drawn from the groups in
proportion to its difficulty mix.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional
import re
import time
import uuid

import numpy as np

GROUP_KEYS = ("g1", "g2", "g3")

_LETTERS_ONLY = re.compile(r"^[a-z]+$")
_NON_LETTERS = re.compile(r"[^a-zA-Z]+")


def clean_words(words: Iterable[str]) -> List[str]:
    """Trim, lowercase and keep letters-only words. Repeats are kept."""
    result: List[str] = []
    for raw in words:
        word = (raw or "").strip().lower()
        if word and _LETTERS_ONLY.match(word):
            result.append(word)
    return result


def normalize_words(words: Iterable[str]) -> List[str]:
    """Like clean_words, but drop duplicates (first occurrence wins)."""
    seen = set()
    result: List[str] = []
    for word in clean_words(words):
        if word in seen:
            continue
        seen.add(word)
        result.append(word)
    return result


def parse_bulk(text: str) -> List[str]:
    """Split free text on anything that is not a letter."""
    tokens = [t.strip() for t in _NON_LETTERS.split(text or "")]
    return normalize_words(t for t in tokens if t)


@dataclass
class WordMix:
    """Proportions of the three difficulty groups."""
    g1: float = 0.6
    g2: float = 0.3
    g3: float = 0.1

    def weight(self, key: str) -> float:
        return getattr(self, key)

    def normalized(self) -> "WordMix":
        """Clamp negatives to zero and scale to sum to one."""
        g1 = max(0.0, float(self.g1 or 0))
        g2 = max(0.0, float(self.g2 or 0))
        g3 = max(0.0, float(self.g3 or 0))
        total = g1 + g2 + g3
        if total <= 0:
            return WordMix(1.0, 0.0, 0.0)
        return WordMix(g1 / total, g2 / total, g3 / total)

    def to_dict(self) -> Dict[str, float]:
        return {"g1": self.g1, "g2": self.g2, "g3": self.g3}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordMix":
        return cls(
            g1=data.get("g1", 0.6),
            g2=data.get("g2", 0.3),
            g3=data.get("g3", 0.1),
        )


@dataclass
class WordBank:
    """A named set of words split into three difficulty groups."""
    id: str
    name: str
    g1: List[str] = field(default_factory=list)
    g2: List[str] = field(default_factory=list)
    g3: List[str] = field(default_factory=list)
    created_at: float = field(default_factory=time.time)
    updated_at: float = field(default_factory=time.time)

    def group(self, key: str) -> List[str]:
        return getattr(self, key)

    def all_words(self) -> List[str]:
        return normalize_words(self.g1 + self.g2 + self.g3)

    def is_empty(self) -> bool:
        return not (self.g1 or self.g2 or self.g3)

    @classmethod
    def from_bulk(cls, name: str, words: Iterable[str], bank_id: Optional[str] = None) -> "WordBank":
        """Build a bank from a flat list, split into thirds by word length."""
        ordered = sorted(normalize_words(words), key=len)
        n = len(ordered)
        first, second = n // 3, (2 * n) // 3
        return cls(
            id=bank_id or str(uuid.uuid4()),
            name=name,
            g1=ordered[:first],
            g2=ordered[first:second],
            g3=ordered[second:],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "groups": {"g1": list(self.g1), "g2": list(self.g2), "g3": list(self.g3)},
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WordBank":
        groups = data.get("groups", {})
        return cls(
            id=data.get("id") or str(uuid.uuid4()),
            name=data.get("name", "Untitled"),
            g1=normalize_words(groups.get("g1", [])),
            g2=normalize_words(groups.get("g2", [])),
            g3=normalize_words(groups.get("g3", [])),
            created_at=data.get("created_at", time.time()),
            updated_at=data.get("updated_at", time.time()),
        )


def default_bank() -> WordBank:
    """Built-in bank used when nothing else is available."""
    short_words = [
        "fire", "wind", "iron", "wood", "sky", "ring", "star", "hand", "time", "true",
        "play", "game", "type", "code", "stone", "arrow", "guard", "laser", "pixel",
        "combo", "skill", "focus", "valor", "storm", "night", "light", "tower", "magic",
    ]
    medium_words = [
        "swift", "brave", "steel", "armor", "forge", "flame", "frost", "earth", "river",
        "castle", "shield", "archer", "banner", "knight", "resist", "shadow", "lantern",
        "harvest", "thunder", "captain", "warden", "citadel",
    ]
    long_words = [
        "barricade", "sentinel", "stronghold", "onslaught", "resurgence", "cataclysm",
        "dominion", "unbreakable", "sovereign", "indomitable", "perseverance",
        "battlement", "fortification", "vigilance", "catapult", "commander",
    ]
    return WordBank(
        id="default",
        name="Default",
        g1=normalize_words(short_words),
        g2=normalize_words(medium_words),
        g3=normalize_words(long_words),
    )


def allocate_counts(total: int, mix: WordMix) -> Dict[str, int]:
    """
    Split ``total`` words across the groups by mix weight.

    Rounding leftovers go to the highest-weighted group; overshoot is taken
    from the largest count, so the counts always sum to ``total``.
    """
    total = max(0, total)

    def clamp(n: float) -> int:
        return max(0, min(total, int(round(n))))

    counts = {key: clamp(total * mix.weight(key)) for key in GROUP_KEYS}
    diff = total - sum(counts.values())
    by_weight = sorted(GROUP_KEYS, key=lambda k: mix.weight(k), reverse=True)

    while diff != 0:
        if diff > 0:
            counts[by_weight[0]] += 1
            diff -= 1
        else:
            largest = max(GROUP_KEYS, key=lambda k: counts[k])
            counts[largest] -= 1
            diff += 1
    return counts


def _take_random(pool: List[str], count: int, rng: np.random.Generator) -> List[str]:
    """Draw without replacement, refilling from the pool once it runs dry."""
    out: List[str] = []
    remaining = list(pool)
    for _ in range(count):
        if not remaining:
            if not pool:
                break
            remaining = list(pool)
        idx = int(rng.integers(len(remaining)))
        out.append(remaining.pop(idx))
    return out


def make_word_bag(
    total: int,
    mix: WordMix,
    bank: Optional[WordBank] = None,
    rng: Optional[np.random.Generator] = None,
) -> List[str]:
    """
    Build a shuffled bag of ``total`` words following the difficulty mix.

    Args:
        total: Number of words to draw
        mix: Proportions of g1/g2/g3
        bank: Word bank to draw from (default bank if None or empty)
        rng: Random generator for reproducible bags

    Returns:
        List of words, length ``total`` unless every group is empty
    """
    rng = rng if rng is not None else np.random.default_rng()
    if bank is None or bank.is_empty():
        bank = default_bank()

    counts = allocate_counts(total, mix)
    bag: List[str] = []
    for key in GROUP_KEYS:
        pool = bank.group(key)
        # Fall back to the whole bank when a requested group is empty
        if not pool and counts[key] > 0:
            pool = bank.all_words()
        bag.extend(_take_random(pool, counts[key], rng))

    order = rng.permutation(len(bag))
    return [bag[i] for i in order]
