"""Context extraction, priority resolution and emoji annotation.

All three are pure functions over a RuleSet. Unknown type strings are not
rejected here; they fall through every lookup to the global defaults.
"""
from enum import Enum
from typing import Optional, Union

from .rules import RuleSet
from .enums import DEFAULT_CONTEXT, URGENT_CONTEXT, NotificationType, Priority

TypeLike = Union[NotificationType, str]


def _key(value) -> str:
    return value.value if isinstance(value, Enum) else value


def extract_context(rules: RuleSet, notification_type: TypeLike, message: Optional[str]) -> str:
    if not message:
        return DEFAULT_CONTEXT

    best_label = DEFAULT_CONTEXT
    best_weight = 0
    for rule in rules.patterns:
        if rule.weight > best_weight and rule.matches(message):
            best_label = rule.label
            best_weight = rule.weight

    if best_label == URGENT_CONTEXT:
        return URGENT_CONTEXT
    if best_label in rules.labels_for(_key(notification_type)):
        return best_label
    return DEFAULT_CONTEXT


def resolve_priority(rules: RuleSet, notification_type: TypeLike, context: Optional[str]) -> Priority:
    if context == URGENT_CONTEXT:
        return Priority.URGENT
    table = rules.priorities.get(_key(notification_type), {})
    return table.get(context) or table.get(DEFAULT_CONTEXT) or Priority.NORMAL


def annotate_emoji(
    rules: RuleSet,
    notification_type: TypeLike,
    context: Optional[str],
    priority: Union[Priority, str],
) -> str:
    table = rules.emojis.get(_key(notification_type), {})
    return (
        table.get(context)
        or table.get(_key(priority))
        or table.get(DEFAULT_CONTEXT)
        or rules.fallback_emoji
    )
