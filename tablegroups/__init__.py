"""tablegroups - group manager engine for a table catalog.

Author: Michael Economou
Date: 2026-10-02

Assigns catalog tables to named groups, tracks per-group description,
application status and data fields, records every edit for undo/redo and
computes the change-set needed to bring the stored groups up to date.
"""

from tablegroups.config import APP_VERSION

__version__ = APP_VERSION
