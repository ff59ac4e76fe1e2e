"""Module: tablegroups.config

Author: Michael Economou
Date: 2026-10-02

Configuration package for the group manager.

- app: Application info, dialog title, logging
- features: Undo/redo limits, item catalog categories, default data fields

All settings are re-exported from this module:
    from tablegroups.config import UNDO_REDO_SETTINGS
"""

from tablegroups.config.app import *  # noqa: F401, F403
from tablegroups.config.features import *  # noqa: F401, F403
