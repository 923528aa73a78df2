"""
Ordered Rule Tables

A rule table is an ordered tuple of ``LabelRule`` entries evaluated top to
bottom; the first rule whose predicate holds decides the result. Specific
phrases must therefore sit above the generic phrases they contain
("randomized controlled" above "trial").

Matching is plain lowercase substring matching. Rules flagged with
``negation_guard`` ignore occurrences immediately preceded by a negation
("not a systematic review", "non-randomized").
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")

# Checked against the text immediately before a phrase (whitespace stripped).
NEGATION_PREFIXES: tuple[str, ...] = (
    "not a",
    "not an",
    "not",
    "isn't a",
    "isn't",
    "no",
    "non-",
    "non",
    "never a",
    "neither a",
    "nor a",
    "rather than a",
    "rather than",
    "instead of a",
    "instead of",
)


class MatchMode(str, Enum):
    """How a rule compares its phrases with the input."""

    CONTAINS = "contains"
    EXACT = "exact"


def _preceded_by_negation(text: str, index: int) -> bool:
    preceding = text[:index].rstrip()
    for prefix in NEGATION_PREFIXES:
        if not preceding.endswith(prefix):
            continue
        start = len(preceding) - len(prefix)
        if start == 0 or not preceding[start - 1].isalnum():
            return True
    return False


def occurs_unnegated(text: str, phrase: str) -> bool:
    """True if ``phrase`` occurs in ``text`` at least once without a negation."""
    start = text.find(phrase)
    while start != -1:
        if not _preceded_by_negation(text, start):
            return True
        start = text.find(phrase, start + 1)
    return False


def is_negated(text: str, phrase: str) -> bool:
    """True if ``text`` contains at least one negated occurrence of ``phrase``."""
    start = text.find(phrase)
    while start != -1:
        if _preceded_by_negation(text, start):
            return True
        start = text.find(phrase, start + 1)
    return False


@dataclass(frozen=True)
class LabelRule(Generic[T]):
    """One ``(predicate, result)`` entry of an ordered rule table."""

    name: str
    result: T
    phrases: tuple[str, ...]
    mode: MatchMode = MatchMode.CONTAINS
    negation_guard: bool = False
    # Skip the rule when one of these appears in the text only in negated form.
    unless_negated: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.phrases:
            raise ValueError(f"Rule '{self.name}' has no phrases")
        if any(p != p.lower() for p in self.phrases + self.unless_negated):
            raise ValueError(f"Rule '{self.name}' phrases must be lowercase")

    def matches(self, text: str, negation_context: str | None = None) -> bool:
        """Evaluate the predicate against already-lowercased ``text``.

        ``negation_context`` is extra lowercased text (e.g. the oracle's
        rationale) that can veto a guarded rule by negating one of its phrases.
        """
        if self.mode is MatchMode.EXACT:
            return text.strip() in self.phrases

        if any(
            is_negated(text, p) and not occurs_unnegated(text, p) for p in self.unless_negated
        ):
            return False

        if not self.negation_guard:
            return any(phrase in text for phrase in self.phrases)

        for phrase in self.phrases:
            if not occurs_unnegated(text, phrase):
                continue
            if negation_context and is_negated(negation_context, phrase):
                continue
            return True
        return False


def evaluate_rules(
    rules: Sequence[LabelRule[T]],
    text: str,
    negation_context: str | None = None,
) -> LabelRule[T] | None:
    """Return the first matching rule, or None. First match wins."""
    for rule in rules:
        if rule.matches(text, negation_context):
            return rule
    return None
