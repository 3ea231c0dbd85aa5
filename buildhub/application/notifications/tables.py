"""Priority and emoji lookup tables keyed by notification type.

Every type carries a ``default`` entry in both tables. Emoji tables mix
context labels and priority names as keys; the annotator tries the context
first and the priority second.
"""
from types import MappingProxyType
from typing import Dict, Mapping

from .enums import NotificationType, Priority

T = NotificationType
P = Priority

GLOBAL_FALLBACK_EMOJI = "📢"
URGENT_EMOJI = "🚨"

# Frozen tables are keyed by the plain string value of the type.
PriorityTable = Mapping[str, Mapping[str, Priority]]
EmojiTable = Mapping[str, Mapping[str, str]]


_PRIORITIES: Dict[NotificationType, Dict[str, Priority]] = {
    T.PROJECT: {
        "default": P.NORMAL,
        "created": P.NORMAL,
        "updated": P.NORMAL,
        "issue": P.HIGH,
        "delay": P.HIGH,
        "risk": P.HIGH,
        "completed": P.NORMAL,
        "milestone": P.NORMAL,
        "budget_exceeded": P.URGENT,
    },
    T.PROJECT_TEAM: {
        "default": P.NORMAL,
        "joined": P.NORMAL,
        "left": P.NORMAL,
        "removed": P.HIGH,
    },
    T.ORDER: {
        "default": P.NORMAL,
        "placed": P.NORMAL,
        "shipped": P.NORMAL,
        "delivered": P.NORMAL,
        "cancelled": P.HIGH,
        "payment_failed": P.URGENT,
        "delayed": P.HIGH,
    },
    T.MESSAGE: {
        "default": P.NORMAL,
        "from_client": P.HIGH,
        "from_admin": P.HIGH,
    },
    T.SERVICE_REQUEST: {
        "default": P.NORMAL,
        "new": P.NORMAL,
        "urgent": P.URGENT,
        "updated": P.NORMAL,
        "approved": P.HIGH,
        "rejected": P.HIGH,
        "connected": P.NORMAL,
    },
    T.PAYMENT: {
        "default": P.NORMAL,
        "due": P.HIGH,
        "overdue": P.URGENT,
        "completed": P.NORMAL,
        "failed": P.URGENT,
        "refunded": P.HIGH,
    },
    T.BID: {
        "default": P.NORMAL,
        "new": P.HIGH,
        "accepted": P.HIGH,
        "rejected": P.NORMAL,
        "countered": P.HIGH,
        "expired": P.LOW,
    },
    T.INVITATION: {
        "default": P.NORMAL,
        "sent": P.NORMAL,
        "accepted": P.NORMAL,
        "declined": P.NORMAL,
        "expired": P.LOW,
    },
    T.PROJECT_UPDATE: {
        "default": P.NORMAL,
        "milestone": P.NORMAL,
        "delay": P.HIGH,
        "issue": P.HIGH,
        "budget_update": P.HIGH,
    },
    T.SCHEDULE_CHANGE: {
        "default": P.NORMAL,
        "minor": P.LOW,
        "major": P.HIGH,
        "urgent": P.URGENT,
    },
    T.MATERIAL_REQUEST: {
        "default": P.NORMAL,
        "new": P.NORMAL,
        "approved": P.NORMAL,
        "rejected": P.HIGH,
        "urgent": P.URGENT,
    },
    T.SYSTEM: {
        "default": P.NORMAL,
        "maintenance": P.NORMAL,
        "update": P.LOW,
        "security": P.URGENT,
        "downtime": P.HIGH,
    },
    T.INVENTORY: {
        "default": P.NORMAL,
        "low": P.HIGH,
        "critical": P.URGENT,
        "out_of_stock": P.URGENT,
        "restock": P.NORMAL,
    },
}


_EMOJIS: Dict[NotificationType, Dict[str, str]] = {
    T.PROJECT: {
        "default": "🏗️",
        "urgent": "🚨",
        "high": "🏗️",
        "normal": "🏗️",
        "low": "📝",
        "info": "ℹ️",
        "created": "🆕",
        "completed": "✅",
        "updated": "🔄",
    },
    T.PROJECT_TEAM: {
        "default": "👥",
        "urgent": "🚨",
        "joined": "👋",
        "left": "👋",
        "added": "➕",
        "removed": "➖",
    },
    T.ORDER: {
        "default": "📦",
        "urgent": "🚨",
        "placed": "🛒",
        "shipped": "🚚",
        "delivered": "📬",
        "cancelled": "❌",
        "payment_failed": "💳",
    },
    T.MESSAGE: {
        "default": "💬",
        "urgent": "‼️",
        "high": "❗",
        "normal": "💬",
        "unread": "📨",
    },
    T.SERVICE_REQUEST: {
        "default": "🔧",
        "urgent": "🆘",
        "high": "🚩",
        "approved": "✅",
        "rejected": "❌",
        "updated": "🔄",
    },
    T.PAYMENT: {
        "default": "💰",
        "urgent": "⚠️",
        "completed": "✅",
        "failed": "❌",
        "refunded": "↩️",
    },
    T.BID: {
        "default": "📝",
        "new": "🆕",
        "accepted": "✅",
        "rejected": "❌",
        "withdrawn": "🔙",
    },
    T.INVITATION: {
        "default": "📩",
        "sent": "📤",
        "accepted": "✅",
        "declined": "❌",
        "expired": "⏱️",
    },
    T.PROJECT_UPDATE: {
        "default": "🔄",
        "urgent": "🚨",
        "milestone": "🏁",
        "delay": "⏱️",
        "issue": "⚠️",
    },
    T.SCHEDULE_CHANGE: {
        "default": "📅",
        "urgent": "⚠️",
        "delayed": "⏰",
        "advanced": "⏩",
    },
    T.MATERIAL_REQUEST: {
        "default": "🧱",
        "approved": "✅",
        "rejected": "❌",
        "urgent": "🚨",
        "delayed": "⏱️",
    },
    T.SYSTEM: {
        "default": "🖥️",
        "urgent": "🚨",
        "maintenance": "🔧",
        "update": "🔄",
        "security": "🔒",
    },
    T.INVENTORY: {
        "default": "📦",
        "urgent": "⚠️",
        "low": "⚠️",
        "critical": "🚨",
        "restock": "🔄",
        "out_of_stock": "❌",
    },
}


def freeze_table(table: Mapping) -> Mapping:
    """Return a read-only copy keyed by type value, checking every type has a default."""
    frozen = {}
    for notification_type, entries in table.items():
        key = NotificationType(notification_type).value
        frozen[key] = MappingProxyType(dict(entries))
    for notification_type in NotificationType:
        if "default" not in frozen.get(notification_type.value, {}):
            raise ValueError(f"Missing 'default' entry for {notification_type.value}")
    return MappingProxyType(frozen)


DEFAULT_PRIORITY_TABLE: PriorityTable = freeze_table(_PRIORITIES)
DEFAULT_EMOJI_TABLE: EmojiTable = freeze_table(_EMOJIS)
