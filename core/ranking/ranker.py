"""
Ranker

Orders scored candidates by descending score. Ties are broken by candidate
id ascending so identical inputs always produce the identical sequence.
"""

from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar('T')


def rank_candidates(
    candidates: Iterable[T],
    score_of: Callable[[T], float],
    id_of: Callable[[T], str]
) -> Iterator[T]:
    """
    Rank candidates by score (descending), then id (ascending).

    Args:
        candidates: Scored candidates
        score_of: Extracts the score from a candidate
        id_of: Extracts the candidate identifier

    Returns:
        One-shot iterator over the ranked candidates
    """
    return iter(sorted(candidates, key=lambda c: (-score_of(c), id_of(c))))
