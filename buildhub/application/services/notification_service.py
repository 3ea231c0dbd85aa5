import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from ..notifications.engine import annotate_emoji, extract_context, resolve_priority
from ..notifications.rules import RuleSet, get_default_rules
from ..notifications.tables import URGENT_EMOJI
from ..notifications.enums import DEFAULT_CONTEXT, URGENT_CONTEXT, NotificationType, Priority
from ..ports.notification_repo import NotificationPayload, NotificationRecord, NotificationRepository
from ...exceptions import InvalidNotificationType, InvalidPriority

logger = logging.getLogger(__name__)

URGENT_KEYWORDS = re.compile(r"urgent|asap|emergency|critical|immediately", re.IGNORECASE)

ORDER_STATUS_CONTEXTS = {
    "processing": "placed",
    "in_transit": "shipped",
    "delivered": "delivered",
    "cancelled": "cancelled",
    "delayed": "delayed",
    "payment_failed": "payment_failed",
}


@dataclass(frozen=True)
class NotificationContent:
    """Recipient-independent part of a notification."""
    title: str
    message: str
    type: Union[NotificationType, str]
    related_item_id: Optional[int] = None
    related_item_type: Optional[str] = None
    action_url: Optional[str] = None


def coerce_type(value: Union[NotificationType, str]) -> NotificationType:
    try:
        return NotificationType(value)
    except ValueError:
        raise InvalidNotificationType(value) from None


def coerce_priority(value: Union[Priority, str]) -> Priority:
    try:
        return Priority(value)
    except ValueError:
        raise InvalidPriority(value) from None


@dataclass
class NotificationService:
    repo: NotificationRepository
    rules: RuleSet = field(default_factory=get_default_rules)
    urgent_emoji: str = URGENT_EMOJI
    preview_length: int = 80
    critical_ratio: float = 0.3

    async def create_smart_notification(
        self,
        user_id: int,
        content: NotificationContent,
        context: Optional[str] = None,
        emoji: Optional[str] = None,
        priority: Optional[Union[Priority, str]] = None,
    ) -> NotificationRecord:
        """Classify, annotate and persist a single notification.

        Explicit ``context``, ``emoji`` and ``priority`` take precedence over
        the derived values. Storage errors are not caught here.
        """
        notification_type = coerce_type(content.type)

        if not context:
            context = extract_context(self.rules, notification_type, content.message)
        resolved_priority = coerce_priority(priority) if priority else resolve_priority(self.rules, notification_type, context)
        resolved_emoji = emoji or annotate_emoji(self.rules, notification_type, context, resolved_priority)

        payload = NotificationPayload(
            user_id=user_id,
            title=content.title,
            message=content.message,
            type=notification_type,
            priority=resolved_priority,
            emoji=resolved_emoji,
            related_item_id=content.related_item_id,
            related_item_type=content.related_item_type,
            action_url=content.action_url,
        )
        record = await self.repo.create_notification(payload)
        logger.info(
            f"Created {notification_type.value} notification {record.id} for user {user_id} "
            f"(context={context}, priority={resolved_priority.value})"
        )
        return record

    async def create_urgent_notification(self, user_id: int, content: NotificationContent) -> NotificationRecord:
        return await self.create_smart_notification(
            user_id, content, emoji=self.urgent_emoji, priority=Priority.URGENT
        )

    async def notify_multiple_users(
        self,
        user_ids: Sequence[int],
        content: NotificationContent,
        context: Optional[str] = None,
    ) -> List[NotificationRecord]:
        """Send the same notification to each user, in order.

        Stops at the first failure and re-raises it; notifications already
        created for earlier users are kept.
        """
        created: List[NotificationRecord] = []
        for user_id in user_ids:
            try:
                created.append(await self.create_smart_notification(user_id, content, context))
            except Exception as e:
                logger.error(
                    f"Batch notification aborted at user {user_id} "
                    f"({len(created)}/{len(user_ids)} created): {e}"
                )
                raise
        return created

    async def create_project_notification(
        self,
        user_id: int,
        project_id: int,
        title: str,
        message: str,
        context: str,
        action_url: Optional[str] = None,
    ) -> NotificationRecord:
        content = NotificationContent(
            title=title,
            message=message,
            type=NotificationType.PROJECT,
            related_item_id=project_id,
            related_item_type="project",
            action_url=action_url,
        )
        return await self.create_smart_notification(user_id, content, context)

    async def create_message_notification(
        self,
        user_id: int,
        sender_name: str,
        message_content: str,
        message_id: int,
        project_id: Optional[int] = None,
        project_name: Optional[str] = None,
    ) -> NotificationRecord:
        context = URGENT_CONTEXT if URGENT_KEYWORDS.search(message_content) else DEFAULT_CONTEXT
        title = f"New message about {project_name}" if project_name else f"New message from {sender_name}"
        content = NotificationContent(
            title=title,
            message=self._preview(message_content),
            type=NotificationType.MESSAGE,
            related_item_id=message_id,
            related_item_type="message",
            action_url=f"/projects/{project_id}/messages" if project_id else "/messages",
        )
        return await self.create_smart_notification(user_id, content, context)

    async def create_order_status_notification(
        self,
        user_id: int,
        order_id: int,
        order_status: str,
        title: str,
        message: str,
    ) -> NotificationRecord:
        context = ORDER_STATUS_CONTEXTS.get(order_status)
        if context is None:
            logger.warning(f"Unmapped order status {order_status!r} for order {order_id}, using default context")
            context = DEFAULT_CONTEXT
        content = NotificationContent(
            title=title,
            message=message,
            type=NotificationType.ORDER,
            related_item_id=order_id,
            related_item_type="order",
            action_url=f"/orders/{order_id}",
        )
        return await self.create_smart_notification(user_id, content, context)

    async def create_payment_notification(
        self,
        user_id: int,
        payment_id: int,
        payment_status: str,
        title: str,
        message: str,
    ) -> NotificationRecord:
        content = NotificationContent(
            title=title,
            message=message,
            type=NotificationType.PAYMENT,
            related_item_id=payment_id,
            related_item_type="payment",
            action_url=f"/payments/{payment_id}",
        )
        return await self.create_smart_notification(user_id, content, payment_status)

    async def create_low_inventory_notification(
        self,
        user_id: int,
        material_name: str,
        material_id: int,
        current_quantity: int,
        low_threshold: int,
    ) -> NotificationRecord:
        critically_low = current_quantity <= low_threshold * self.critical_ratio
        unit = "unit" if current_quantity == 1 else "units"
        content = NotificationContent(
            title="Critical Inventory Alert" if critically_low else "Low Inventory Warning",
            message=f"{material_name} inventory is running low ({current_quantity} {unit} remaining)",
            type=NotificationType.INVENTORY,
            related_item_id=material_id,
            related_item_type="material",
            action_url=f"/materials/{material_id}",
        )
        context = URGENT_CONTEXT if critically_low else DEFAULT_CONTEXT
        return await self.create_smart_notification(user_id, content, context)

    def _preview(self, text: str) -> str:
        if len(text) > self.preview_length:
            return f"{text[:self.preview_length]}..."
        return text
