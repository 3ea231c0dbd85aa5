from dataclasses import dataclass
from functools import lru_cache
from typing import FrozenSet, Iterable, Mapping, Optional, Tuple

from .patterns import DEFAULT_PATTERN_RULES, PatternRule, compile_rules
from .tables import (
    DEFAULT_EMOJI_TABLE,
    DEFAULT_PRIORITY_TABLE,
    GLOBAL_FALLBACK_EMOJI,
    EmojiTable,
    PriorityTable,
    freeze_table,
)
from .enums import DEFAULT_CONTEXT, URGENT_CONTEXT


@dataclass(frozen=True)
class RuleSet:
    """Everything the classifier and resolvers read. Built once, never mutated."""
    patterns: Tuple[PatternRule, ...]
    priorities: PriorityTable
    emojis: EmojiTable
    fallback_emoji: str = GLOBAL_FALLBACK_EMOJI

    def labels_for(self, notification_type: str) -> FrozenSet[str]:
        return frozenset(self.priorities.get(notification_type, {})) | frozenset(
            self.emojis.get(notification_type, {})
        )


def known_labels(priorities: PriorityTable, emojis: EmojiTable) -> FrozenSet[str]:
    labels = {DEFAULT_CONTEXT, URGENT_CONTEXT}
    for table in (priorities, emojis):
        for entries in table.values():
            labels.update(entries)
    return frozenset(labels)


def build_rule_set(
    pattern_rules: Iterable[Tuple[str, str, int]] = DEFAULT_PATTERN_RULES,
    priorities: Optional[Mapping] = None,
    emojis: Optional[Mapping] = None,
    fallback_emoji: str = GLOBAL_FALLBACK_EMOJI,
) -> RuleSet:
    if not fallback_emoji:
        raise ValueError("fallback_emoji must not be empty")
    priority_table = DEFAULT_PRIORITY_TABLE if priorities is None else freeze_table(priorities)
    emoji_table = DEFAULT_EMOJI_TABLE if emojis is None else freeze_table(emojis)
    patterns = compile_rules(pattern_rules, known_labels(priority_table, emoji_table))
    return RuleSet(
        patterns=patterns,
        priorities=priority_table,
        emojis=emoji_table,
        fallback_emoji=fallback_emoji,
    )


@lru_cache()
def get_default_rules(fallback_emoji: str = GLOBAL_FALLBACK_EMOJI) -> RuleSet:
    return build_rule_set(fallback_emoji=fallback_emoji)
