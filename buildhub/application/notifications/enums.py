from enum import Enum


class NotificationType(str, Enum):
    PROJECT = "project"
    PROJECT_TEAM = "project_team"
    ORDER = "order"
    MESSAGE = "message"
    SERVICE_REQUEST = "service_request"
    PAYMENT = "payment"
    BID = "bid"
    INVITATION = "invitation"
    PROJECT_UPDATE = "project_update"
    SCHEDULE_CHANGE = "schedule_change"
    MATERIAL_REQUEST = "material_request"
    INVENTORY = "inventory"
    SYSTEM = "system"


class Priority(str, Enum):
    URGENT = "urgent"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"
    INFO = "info"


DEFAULT_CONTEXT = "default"
URGENT_CONTEXT = "urgent"
