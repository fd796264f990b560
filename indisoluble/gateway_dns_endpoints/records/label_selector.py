#!/usr/bin/env python3

"""Label selectors used to match gateways against custom weights.

Follows Kubernetes label selector semantics: equality labels plus
set-based expressions, all of which must hold for a match.
"""

import enum

from typing import List, Mapping, NamedTuple, Optional, Sequence, Tuple


class SelectorOperator(str, enum.Enum):
    IN = "In"
    NOT_IN = "NotIn"
    EXISTS = "Exists"
    DOES_NOT_EXIST = "DoesNotExist"


class LabelSelectorRequirement(NamedTuple):
    key: str
    operator: str
    values: Tuple[str, ...] = ()


class LabelSelector(NamedTuple):
    match_labels: Optional[Mapping[str, str]] = None
    match_expressions: Optional[Sequence[LabelSelectorRequirement]] = None

    @property
    def is_empty(self) -> bool:
        """True when neither labels nor expressions were defined."""
        return self.match_labels is None and self.match_expressions is None


class _Requirement(NamedTuple):
    key: str
    operator: SelectorOperator
    values: frozenset

    def matches(self, labels: Mapping[str, str]) -> bool:
        if self.operator == SelectorOperator.IN:
            return self.key in labels and labels[self.key] in self.values
        if self.operator == SelectorOperator.NOT_IN:
            return self.key not in labels or labels[self.key] not in self.values
        if self.operator == SelectorOperator.EXISTS:
            return self.key in labels
        return self.key not in labels


def _compile_expression(expression: LabelSelectorRequirement) -> _Requirement:
    if not isinstance(expression, LabelSelectorRequirement):
        raise ValueError(f"'{expression}' is not a label selector requirement")

    if not isinstance(expression.key, str) or not expression.key:
        raise ValueError("Selector requirement key cannot be empty")

    try:
        operator = SelectorOperator(expression.operator)
    except ValueError as ex:
        raise ValueError(
            f"'{expression.operator}' is not a valid label selector operator"
        ) from ex

    if isinstance(expression.values, (str, bytes, Mapping)):
        raise ValueError(f"Values for '{expression.key}' must be a list of strings")

    try:
        values = frozenset(expression.values or ())
    except TypeError as ex:
        raise ValueError(
            f"Values for '{expression.key}' must be a list of strings"
        ) from ex
    if not all(isinstance(value, str) for value in values):
        raise ValueError(f"Values for '{expression.key}' must be a list of strings")

    if operator in (SelectorOperator.IN, SelectorOperator.NOT_IN) and not values:
        raise ValueError(
            f"Values for '{expression.key}' must be non-empty with operator {operator.value}"
        )
    if (
        operator in (SelectorOperator.EXISTS, SelectorOperator.DOES_NOT_EXIST)
        and values
    ):
        raise ValueError(
            f"Values for '{expression.key}' must be empty with operator {operator.value}"
        )

    return _Requirement(expression.key, operator, values)


def compile_selector(selector: LabelSelector) -> List[_Requirement]:
    """Turn a selector into requirements, raising ValueError when malformed."""
    match_labels = selector.match_labels
    if match_labels is not None and not isinstance(match_labels, Mapping):
        raise ValueError(f"Match labels '{match_labels}' must be a mapping")

    match_expressions = selector.match_expressions
    if match_expressions is not None and not isinstance(
        match_expressions, (list, tuple)
    ):
        raise ValueError(f"Match expressions '{match_expressions}' must be a list")

    requirements = [
        _compile_expression(
            LabelSelectorRequirement(key, SelectorOperator.IN, (value,))
        )
        for key, value in (match_labels or {}).items()
    ]
    requirements.extend(
        _compile_expression(expression) for expression in match_expressions or ()
    )

    return requirements


def matches(selector: LabelSelector, labels: Mapping[str, str]) -> bool:
    """Return whether labels satisfy every requirement of selector."""
    return all(
        requirement.matches(labels) for requirement in compile_selector(selector)
    )
