"""
CHW intake core: conversation store, flows and the engine driving them.
"""

from intake.engine import FlowEngine, Messenger

__all__ = ["FlowEngine", "Messenger"]
