# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Duplication type classification for duplicate groups."""

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import Callable, Sequence

from dupdetect.model import DuplicateGroup, DuplicationType, MethodRecord
from dupdetect.normalizer import extract_parameter_types, normalize_body

logger = logging.getLogger(__name__)

STRUCTURAL_MATCH_RATIO = 0.7

_LOOP = re.compile(r"\b(?:for|while)\b")
_CONDITIONAL = re.compile(r"\b(?:if|switch)\b")
_CALL = re.compile(
    r"\b(?!(?:for|while|if|switch|catch|synchronized|return)\b)[A-Za-z_$][\w$]*\s*\("
)

Predicate = Callable[[Sequence[MethodRecord]], bool]


@dataclass(frozen=True)
class ClassificationRule:
    """Pair a duplication label with the predicate that selects it."""

    label: DuplicationType
    predicate: Predicate


def has_identical_bodies(members: Sequence[MethodRecord]) -> bool:
    first = normalize_body(members[0].body)
    return all(normalize_body(member.body) == first for member in members)


def has_matching_signatures(members: Sequence[MethodRecord]) -> bool:
    """Return whether members share a signature or mostly agree on a parameter.

    Members match when every raw signature is identical, or when all share the
    same non-zero parameter count and some position holds at most
    ``ceil(n / 2)`` distinct types.
    """
    if len({member.signature for member in members}) == 1:
        return True

    all_params = [extract_parameter_types(member.signature) for member in members]
    param_count = len(all_params[0])
    if param_count == 0 or any(len(params) != param_count for params in all_params):
        return False
    majority_bound = math.ceil(len(members) / 2)
    return any(
        len({params[index] for params in all_params}) <= majority_bound
        for index in range(param_count)
    )


def _structure_profile(body: str) -> tuple[bool, bool, bool]:
    normalized = normalize_body(body)
    return (
        _LOOP.search(normalized) is not None,
        _CONDITIONAL.search(normalized) is not None,
        _CALL.search(normalized) is not None,
    )


def has_shared_structure(members: Sequence[MethodRecord]) -> bool:
    """Return whether most members follow the first member's control-flow shape.

    The first body must contain a loop, a conditional or a call. At least 70% of
    the remaining members must show the same presence/absence of all three.
    """
    first_profile = _structure_profile(members[0].body)
    if not any(first_profile):
        return False
    others = members[1:]
    matching = sum(
        1 for member in others if _structure_profile(member.body) == first_profile
    )
    return matching >= len(others) * STRUCTURAL_MATCH_RATIO


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(label="EXACT", predicate=has_identical_bodies),
    ClassificationRule(label="SIGNATURE", predicate=has_matching_signatures),
    ClassificationRule(label="STRUCTURAL", predicate=has_shared_structure),
)


class DuplicationClassifier:
    """Label groups by evaluating an ordered chain of rules."""

    def __init__(
        self,
        rules: Sequence[ClassificationRule] = DEFAULT_RULES,
        fallback: DuplicationType = "GENERIC",
    ) -> None:
        """Initialize classifier.

        Args:
            rules: Rules in priority order; the first matching rule wins.
            fallback: Label used when no rule matches.
        """
        self._rules = tuple(rules)
        self._fallback = fallback

    def classify(self, members: Sequence[MethodRecord]) -> DuplicationType:
        """Return the duplication type of a member sequence.

        Args:
            members: Grouped records, founder first.

        Returns:
            Label of the first matching rule, or the fallback. Sequences of at
            most one member are ``EXACT``.
        """
        if len(members) <= 1:
            return "EXACT"
        for rule in self._rules:
            if rule.predicate(members):
                return rule.label
        return self._fallback

    def label(self, group: DuplicateGroup) -> DuplicateGroup:
        """Return a copy of ``group`` carrying its duplication type."""
        duplication_type = self.classify(group.members)
        logger.debug(
            f"Classified duplicate group (size={group.group_size} "
            f"type={duplication_type})"
        )
        return replace(group, duplication_type=duplication_type)
