from .gate import CoalescingGate, GateOutcome
from .lifecycle import DEFAULT_KEY, ConfigLifecycle, ProcessFlags

__all__ = ["CoalescingGate", "ConfigLifecycle", "DEFAULT_KEY", "GateOutcome", "ProcessFlags"]
