# Models package (re-export feature modules for stable imports)
from .notifications.notification import Notification, utc_now

__all__ = [
    "Notification",
    "utc_now",
]
