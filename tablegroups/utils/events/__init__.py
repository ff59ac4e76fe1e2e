"""Module: __init__.py

Author: Michael Economou
Date: 2026-10-02

Event system for the core layers.

Pure Python signals, so the registry, tree and history can notify observers
without a Qt dependency.
"""

from tablegroups.utils.events.observable import Observable, Signal, SignalInstance

__all__ = ["Observable", "Signal", "SignalInstance"]
