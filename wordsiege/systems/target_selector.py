"""
Target selection and re-targeting heuristics.

Decides which live word target is focused and answers the resolver's
FreeType and Mismatch queries. Candidate order is fixed: the boss first,
then hostiles closest to the breach line, then typed pickups closest to
the ground.
"""

from typing import Callable, Iterable, List, Optional

from ..core.word_target import WordTarget
from ..entities.boss import BossPhase
from ..entities.hostile import Hostile
from ..entities.pickup import TypedPickup


class TargetSelector:
    """
    Picks the focused target among the live candidates.

    The selector reads the live collections through callables so it always
    sees the controller's current state without owning any of it.
    """

    def __init__(
        self,
        get_boss: Callable[[], Optional[BossPhase]],
        get_hostiles: Callable[[], Iterable[Hostile]],
        get_pickups: Callable[[], Iterable[TypedPickup]],
    ):
        self._get_boss = get_boss
        self._get_hostiles = get_hostiles
        self._get_pickups = get_pickups

    def candidates(self) -> List[WordTarget]:
        """All targetable word targets in priority order."""
        ordered: List[WordTarget] = []

        boss = self._get_boss()
        if boss is not None and boss.is_targetable:
            ordered.append(boss)

        # sorted() is stable, so spawn order breaks exact distance ties
        hostiles = [h for h in self._get_hostiles() if h.is_targetable]
        ordered.extend(sorted(hostiles, key=lambda h: h.distance_to_breach))

        pickups = [p for p in self._get_pickups() if p.is_targetable]
        ordered.extend(sorted(pickups, key=lambda p: -p.y))

        return ordered

    def pick_focus(self) -> Optional[WordTarget]:
        """Target to bind when nothing is bound yet."""
        ordered = self.candidates()
        return ordered[0] if ordered else None

    def find_match(self, prefix: str) -> Optional[WordTarget]:
        """First candidate in priority order whose word starts with prefix."""
        if not prefix:
            return None
        prefix = prefix.lower()
        for target in self.candidates():
            if target.word.lower().startswith(prefix):
                return target
        return None

    def find_all_with_word(self, word: str) -> List[WordTarget]:
        """Every live target currently carrying exactly this word."""
        return [t for t in self.candidates() if t.word == word]

    def on_free_type(self, prefix: str, bound: Optional[WordTarget]) -> Optional[WordTarget]:
        """
        Answer a FreeType query.

        Returns:
            The target to re-bind to, or None to keep the current binding
        """
        if bound is not None and bound.is_targetable and bound.word.lower().startswith(prefix.lower()):
            return None
        return self.find_match(prefix)

    def on_mismatch(self, prefix: str, current_length: int) -> Optional[WordTarget]:
        """
        Answer a Mismatch query.

        Switching words is only allowed before the first correct character
        has been committed.
        """
        if current_length > 0:
            return None
        return self.find_match(prefix)

