"""Public engine API contracts."""

from engine.api.ai import Agent, Blackboard, DecisionContext, create_blackboard
from engine.api.events import EventBus, Subscription, create_event_bus
from engine.api.flow import FlowContext, FlowMachine, FlowTransition, create_flow_machine
from engine.api.logging import EngineLoggingConfig, JsonFormatter, configure_logging, get_logger

__all__ = [
    "Agent",
    "Blackboard",
    "DecisionContext",
    "EngineLoggingConfig",
    "EventBus",
    "FlowContext",
    "FlowMachine",
    "FlowTransition",
    "JsonFormatter",
    "Subscription",
    "configure_logging",
    "create_blackboard",
    "create_event_bus",
    "create_flow_machine",
    "get_logger",
]
