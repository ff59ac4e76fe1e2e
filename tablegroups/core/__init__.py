"""Core group manager engine.

Author: Michael Economou
Date: 2026-10-02

- GroupRegistry: live groups with description, application flag and data fields
- MembershipTree: group headers and the catalog items assigned to them
- EditHistory: compound undo/redo sequences of atomic edits
- compute_change_set: diff of the live state against the committed snapshot
- SelectionCoordinator: catalog/tree selection sync and the active group
- GroupManagerSession: facade used by the window layer
"""
