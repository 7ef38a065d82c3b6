"""AI primitive implementations."""

from engine.ai.blackboard import RuntimeBlackboard

__all__ = ["RuntimeBlackboard"]
