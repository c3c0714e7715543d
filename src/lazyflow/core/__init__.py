"""Core types: the lazy sequence, the push bridge and composition helpers."""

from .bridge import BridgeState, Overflow, PushBridge
from .compose import Curried, compose, curry, identity, pipe
from .lazy import IteratorFactory, Lazy, Source, get_iterator, iterating, make_iterator

__all__ = [
    # Sequence
    "Lazy", "Source", "IteratorFactory", "make_iterator", "get_iterator", "iterating",
    # Bridge
    "PushBridge", "BridgeState", "Overflow",
    # Composition
    "Curried", "curry", "compose", "pipe", "identity",
]
