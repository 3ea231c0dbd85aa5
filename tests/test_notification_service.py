from datetime import datetime, timezone
from typing import List

import pytest

from buildhub.application.notifications import NotificationType, Priority
from buildhub.application.ports.notification_repo import NotificationPayload, NotificationRecord
from buildhub.application.services.notification_service import NotificationContent, NotificationService
from buildhub.exceptions import InvalidNotificationType, InvalidPriority, NotificationError, PersistenceError


class FakeNotificationRepo:
    def __init__(self):
        self.rows: List[NotificationRecord] = []
        self._id = 1

    async def create_notification(self, payload: NotificationPayload) -> NotificationRecord:
        rec = NotificationRecord(
            id=self._id,
            user_id=payload.user_id,
            title=payload.title,
            message=payload.message,
            type=payload.type,
            priority=payload.priority,
            emoji=payload.emoji,
            related_item_id=payload.related_item_id,
            related_item_type=payload.related_item_type,
            action_url=payload.action_url,
            created_at=datetime.now(timezone.utc),
        )
        self.rows.append(rec)
        self._id += 1
        return rec


class FailingRepo(FakeNotificationRepo):
    def __init__(self, fail_for_user: int):
        super().__init__()
        self.fail_for_user = fail_for_user
        self.attempted = []
        self.error = PersistenceError("db down")

    async def create_notification(self, payload: NotificationPayload) -> NotificationRecord:
        self.attempted.append(payload.user_id)
        if payload.user_id == self.fail_for_user:
            raise self.error
        return await super().create_notification(payload)


def make_service(repo=None):
    return NotificationService(repo=repo or FakeNotificationRepo())


@pytest.mark.asyncio
async def test_project_notification_created_context():
    svc = make_service()
    out = await svc.create_project_notification(
        user_id=1, project_id=3, title="Project", message="New project created", context="created"
    )
    assert out.type == NotificationType.PROJECT
    assert out.priority == Priority.NORMAL
    assert out.emoji == "🆕"
    assert out.related_item_type == "project"
    assert out.related_item_id == 3
    assert out.is_read is False


@pytest.mark.asyncio
async def test_low_inventory_critical():
    svc = make_service()
    out = await svc.create_low_inventory_notification(5, "Cement", 10, 2, 10)
    assert out.title == "Critical Inventory Alert"
    assert out.priority == Priority.URGENT
    assert out.emoji == "⚠️"
    assert out.message == "Cement inventory is running low (2 units remaining)"
    assert out.related_item_type == "material"
    assert out.action_url == "/materials/10"


@pytest.mark.asyncio
async def test_low_inventory_warning_and_singular_unit():
    svc = make_service()
    warning = await svc.create_low_inventory_notification(5, "Rebar", 11, 4, 10)
    assert warning.title == "Low Inventory Warning"
    assert warning.priority == Priority.NORMAL
    assert warning.emoji == "📦"

    single = await svc.create_low_inventory_notification(5, "Rebar", 11, 1, 10)
    assert single.message == "Rebar inventory is running low (1 unit remaining)"
    assert single.title == "Critical Inventory Alert"


@pytest.mark.asyncio
async def test_message_with_urgency_keyword():
    svc = make_service()
    out = await svc.create_message_notification(user_id=1, sender_name="Jane", message_content="Please review ASAP", message_id=7)
    assert out.priority == Priority.URGENT
    assert out.emoji == "‼️"
    assert out.title == "New message from Jane"
    assert out.action_url == "/messages"
    assert out.related_item_type == "message"
    assert out.related_item_id == 7


@pytest.mark.asyncio
async def test_message_about_project_is_truncated():
    svc = make_service()
    out = await svc.create_message_notification(
        user_id=1, sender_name="Jane", message_content="a" * 100, message_id=8, project_id=4, project_name="Tower A"
    )
    assert out.title == "New message about Tower A"
    assert out.message == "a" * 80 + "..."
    assert out.action_url == "/projects/4/messages"
    assert out.priority == Priority.NORMAL
    assert out.emoji == "💬"


@pytest.mark.asyncio
@pytest.mark.parametrize("status, priority, emoji", [
    ("processing", Priority.NORMAL, "🛒"),
    ("in_transit", Priority.NORMAL, "🚚"),
    ("delivered", Priority.NORMAL, "📬"),
    ("cancelled", Priority.HIGH, "❌"),
    ("delayed", Priority.HIGH, "📦"),
    ("payment_failed", Priority.URGENT, "💳"),
    ("returned", Priority.NORMAL, "📦"),
])
async def test_order_status_mapping(status, priority, emoji):
    svc = make_service()
    out = await svc.create_order_status_notification(2, 9, status, "Order update", "Your order changed")
    assert out.priority == priority
    assert out.emoji == emoji
    assert out.type == NotificationType.ORDER
    assert out.related_item_type == "order"
    assert out.action_url == "/orders/9"


@pytest.mark.asyncio
@pytest.mark.parametrize("current, title, priority", [
    (3, "Critical Inventory Alert", Priority.URGENT),
    (4, "Low Inventory Warning", Priority.NORMAL),
])
async def test_low_inventory_critical_threshold_is_inclusive(current, title, priority):
    svc = make_service()
    out = await svc.create_low_inventory_notification(5, "Sand", 12, current, 10)
    assert out.title == title
    assert out.priority == priority


@pytest.mark.asyncio
async def test_payment_status_used_as_context():
    svc = make_service()
    overdue = await svc.create_payment_notification(3, 12, "overdue", "Payment", "Invoice 12")
    assert overdue.priority == Priority.URGENT
    assert overdue.emoji == "⚠️"
    assert overdue.action_url == "/payments/12"

    pending = await svc.create_payment_notification(3, 12, "pending", "Payment", "Invoice 12")
    assert pending.priority == Priority.NORMAL
    assert pending.emoji == "💰"


@pytest.mark.asyncio
async def test_urgent_notification_forces_priority_and_glyph():
    svc = make_service()
    content = NotificationContent(title="Heads up", message="Scheduled maintenance", type="system")
    out = await svc.create_urgent_notification(4, content)
    assert out.priority == Priority.URGENT
    assert out.emoji == "🚨"


@pytest.mark.asyncio
async def test_overrides_take_precedence():
    svc = make_service()
    content = NotificationContent(title="t", message="New project created", type=NotificationType.PROJECT)
    out = await svc.create_smart_notification(1, content, context="created", emoji="🔔", priority="low")
    assert out.priority == Priority.LOW
    assert out.emoji == "🔔"


@pytest.mark.asyncio
async def test_urgent_text_on_order():
    svc = make_service()
    content = NotificationContent(title="Order", message="URGENT: payment failed immediately", type="order")
    out = await svc.create_smart_notification(1, content)
    assert out.priority == Priority.URGENT
    assert out.emoji == "🚨"


@pytest.mark.asyncio
async def test_invalid_type_rejected_before_persistence():
    repo = FakeNotificationRepo()
    svc = make_service(repo)
    content = NotificationContent(title="t", message="m", type="spaceship")
    with pytest.raises(InvalidNotificationType):
        await svc.create_smart_notification(1, content)
    assert repo.rows == []


@pytest.mark.asyncio
async def test_identical_calls_are_not_deduplicated():
    repo = FakeNotificationRepo()
    svc = make_service(repo)
    content = NotificationContent(title="t", message="Order shipped", type="order")
    first = await svc.create_smart_notification(1, content)
    second = await svc.create_smart_notification(1, content)
    assert first.id != second.id
    assert (first.priority, first.emoji, first.type) == (second.priority, second.emoji, second.type)
    assert len(repo.rows) == 2


@pytest.mark.asyncio
async def test_persistence_error_propagates_unchanged():
    repo = FailingRepo(fail_for_user=1)
    svc = make_service(repo)
    content = NotificationContent(title="t", message="m", type="system")
    with pytest.raises(PersistenceError) as exc:
        await svc.create_smart_notification(1, content)
    assert exc.value is repo.error


@pytest.mark.asyncio
async def test_notify_multiple_users_preserves_order():
    svc = make_service()
    content = NotificationContent(title="Site closed", message="Site closed for inspection", type="project_update")
    out = await svc.notify_multiple_users([1, 2, 3], content, context="issue")
    assert [n.user_id for n in out] == [1, 2, 3]
    assert len({n.id for n in out}) == 3
    for n in out:
        assert (n.title, n.message, n.type) == ("Site closed", "Site closed for inspection", NotificationType.PROJECT_UPDATE)
        assert n.priority == Priority.HIGH
        assert n.emoji == "⚠️"


@pytest.mark.asyncio
async def test_notify_multiple_users_aborts_on_first_failure():
    repo = FailingRepo(fail_for_user=2)
    svc = make_service(repo)
    content = NotificationContent(title="t", message="m", type="system")
    with pytest.raises(PersistenceError):
        await svc.notify_multiple_users([1, 2, 3], content)
    assert repo.attempted == [1, 2]
    assert [r.user_id for r in repo.rows] == [1]


@pytest.mark.asyncio
async def test_unknown_priority_override_rejected_before_persistence():
    repo = FakeNotificationRepo()
    svc = make_service(repo)
    content = NotificationContent(title="t", message="m", type="system")
    with pytest.raises(InvalidPriority) as exc:
        await svc.create_smart_notification(1, content, priority="extreme")
    assert isinstance(exc.value, NotificationError)
    assert exc.value.value == "extreme"
    assert repo.rows == []
