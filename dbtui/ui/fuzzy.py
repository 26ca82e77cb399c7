"""Fuzzy matching of a pattern against candidate strings."""

from __future__ import annotations

from dataclasses import dataclass

_FIRST_CHAR_MATCH_BONUS = 10
_MATCH_FOLLOWING_SEPARATOR_BONUS = 20
_CAMEL_CASE_MATCH_BONUS = 20
_ADJACENT_MATCH_BONUS = 5
_UNMATCHED_LEADING_CHAR_PENALTY = -5
_MAX_UNMATCHED_LEADING_CHAR_PENALTY = -15
_SEPARATORS = frozenset("/-_ .\\")


@dataclass(frozen=True)
class Match:
    """A candidate that contains every pattern character in order."""

    text: str
    index: int
    matched_indexes: tuple[int, ...]
    score: int


def _score(pattern: str, candidate: str) -> tuple[int, tuple[int, ...]] | None:
    matched: list[int] = []
    score = 0
    adjacent_bonus = 0
    previous = ""
    wanted = iter(pattern.lower())
    target = next(wanted, None)
    for position, char in enumerate(candidate):
        if target is None:
            break
        if char.lower() == target:
            if position == 0:
                score += _FIRST_CHAR_MATCH_BONUS
            if previous.islower() and char.isupper():
                score += _CAMEL_CASE_MATCH_BONUS
            if position != 0 and previous in _SEPARATORS:
                score += _MATCH_FOLLOWING_SEPARATOR_BONUS
            if matched and matched[-1] == position - 1:
                adjacent_bonus += _ADJACENT_MATCH_BONUS
                score += adjacent_bonus
            else:
                adjacent_bonus = 0
            matched.append(position)
            target = next(wanted, None)
        previous = char
    if target is not None:
        return None
    score += max(matched[0] * _UNMATCHED_LEADING_CHAR_PENALTY, _MAX_UNMATCHED_LEADING_CHAR_PENALTY)
    score -= len(candidate) - len(matched)
    return score, tuple(matched)


def find(pattern: str, candidates: list[str]) -> list[Match]:
    """Return the candidates matching ``pattern``, best first.

    Matching is case-insensitive; equal scores keep the candidates' order.
    An empty pattern matches nothing.
    """
    if not pattern:
        return []
    matches = []
    for index, candidate in enumerate(candidates):
        result = _score(pattern, candidate)
        if result is not None:
            score, indexes = result
            matches.append(Match(candidate, index, indexes, score))
    matches.sort(key=lambda match: match.score, reverse=True)
    return matches