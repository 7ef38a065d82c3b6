"""Engine runtime modules."""

from engine.api.events import Subscription
from engine.api.flow import FlowContext, FlowTransition
from engine.runtime.events import RuntimeEventBus
from engine.runtime.flow import RuntimeFlowMachine
from engine.runtime.logging import (
    active_log_file,
    configure_engine_logging,
    shutdown_engine_logging,
)

__all__ = [
    "FlowContext",
    "FlowTransition",
    "RuntimeEventBus",
    "RuntimeFlowMachine",
    "Subscription",
    "active_log_file",
    "configure_engine_logging",
    "shutdown_engine_logging",
]
