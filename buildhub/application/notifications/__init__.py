# Notification rules package (re-export for stable imports)
from .enums import NotificationType, Priority, DEFAULT_CONTEXT, URGENT_CONTEXT
from .patterns import PatternRule, DEFAULT_PATTERN_RULES, compile_rules
from .tables import DEFAULT_PRIORITY_TABLE, DEFAULT_EMOJI_TABLE, GLOBAL_FALLBACK_EMOJI, URGENT_EMOJI
from .rules import RuleSet, build_rule_set, get_default_rules, known_labels
from .engine import extract_context, resolve_priority, annotate_emoji

__all__ = [
    "NotificationType",
    "Priority",
    "DEFAULT_CONTEXT",
    "URGENT_CONTEXT",
    "PatternRule",
    "DEFAULT_PATTERN_RULES",
    "compile_rules",
    "DEFAULT_PRIORITY_TABLE",
    "DEFAULT_EMOJI_TABLE",
    "GLOBAL_FALLBACK_EMOJI",
    "URGENT_EMOJI",
    "RuleSet",
    "build_rule_set",
    "get_default_rules",
    "known_labels",
    "extract_context",
    "resolve_priority",
    "annotate_emoji",
]
