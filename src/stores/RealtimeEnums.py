from enum import Enum


class RealtimeStatusEnums(str, Enum):
    SUBSCRIBED = "SUBSCRIBED"
    CLOSED = "CLOSED"
