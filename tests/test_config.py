from buildhub.config import Settings
from buildhub.application.services.notification_service import NotificationService


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("MESSAGE_PREVIEW_LENGTH", "20")
    monkeypatch.setenv("CRITICAL_INVENTORY_RATIO", "0.5")
    s = Settings()
    assert s.MESSAGE_PREVIEW_LENGTH == 20
    assert s.CRITICAL_INVENTORY_RATIO == 0.5
    assert s.NOTIFICATION_FALLBACK_EMOJI == "📢"


class NullRepo:
    async def create_notification(self, payload):
        return payload


def test_service_uses_configured_thresholds():
    svc = NotificationService(repo=NullRepo(), preview_length=5, critical_ratio=0.5)
    assert svc._preview("abcdefgh") == "abcde..."
    assert svc._preview("abc") == "abc"
