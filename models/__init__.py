"""
Models package for routing requests, outcomes and errors.
"""

from .errors import BackendError, RoutingFailure
from .routing import RoutingOutcome, RoutingRequest

__all__ = ["BackendError", "RoutingFailure", "RoutingOutcome", "RoutingRequest"]
