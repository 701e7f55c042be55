"""
Extension tables and path exclusion predicates.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

from .constants import (DEFAULT_EXCEPTION_RULES, HIDDEN_PREFIX, MOVIE_EXTENSIONS,
                        PICTURE_EXTENSIONS)
from .models import Category

ExceptionRule = Tuple[str, ...]


@dataclass(frozen=True)
class FilterSet:
    """Immutable extension sets and exception rules."""
    picture_extensions: Tuple[str, ...] = PICTURE_EXTENSIONS
    movie_extensions: Tuple[str, ...] = MOVIE_EXTENSIONS
    exception_rules: Tuple[ExceptionRule, ...] = DEFAULT_EXCEPTION_RULES

    def __post_init__(self):
        overlap = set(self.picture_extensions) & set(self.movie_extensions)
        if overlap:
            raise ValueError(f"Extensions listed as both picture and movie: {sorted(overlap)}")

    def extension_category(self, ext: str) -> Category:
        ext = ext.lower()
        if ext in self.picture_extensions:
            return Category.PICTURE
        if ext in self.movie_extensions:
            return Category.MOVIE
        return Category.UNKNOWN

    def is_excluded_path(self, parts: Sequence[str],
                         rules: Optional[Iterable[ExceptionRule]] = None) -> bool:
        """True if any rule's segments occur, in order, among the path components.

        Segments need not be contiguous. Matching is exact and case-sensitive.
        """
        if rules is None:
            rules = self.exception_rules
        return any(matches_rule(parts, rule) for rule in rules)

    @staticmethod
    def is_hidden(parts: Sequence[str]) -> bool:
        return any(part.startswith(HIDDEN_PREFIX) for part in parts)


def matches_rule(parts: Sequence[str], rule: Sequence[str]) -> bool:
    """Check whether rule is an in-order subsequence of parts."""
    remaining = iter(parts)
    return all(segment in remaining for segment in rule)
