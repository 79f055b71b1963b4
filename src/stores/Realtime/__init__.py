from .RealtimeChannel import RealtimeChannel

__all__ = ["RealtimeChannel"]
