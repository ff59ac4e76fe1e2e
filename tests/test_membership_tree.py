"""Module: test_membership_tree.py

Author: Michael Economou
Date: 2026-10-02

Tests for MembershipTree: structure edits, selection, item-to-group lookup
and group definition rows.
"""

import pytest

from tablegroups.core.errors import DuplicateNameError, NotFoundError
from tablegroups.core.history.edit_history import EditHistory
from tablegroups.core.membership_tree import MembershipTree
from tablegroups.models.item_path import GROUP_NODE_LEVEL, ITEM_NODE_LEVEL, GroupRow


def build_tree(rows):
    history = EditHistory()
    return MembershipTree(history, [GroupRow(*row) for row in rows]), history


class TestMembershipTreeStructure:
    """Test header and item edits."""

    def test_initial_rows(self):
        tree, history = build_tree([("G1", "T1"), ("G1", "T2"), ("G2", "")])

        assert tree.group_names() == ["G1", "G2"]
        assert tree.items_in_group("G1") == ["T1", "T2"]
        assert tree.items_in_group("G2") == []
        assert not history.can_undo()

    def test_insert_header(self, tree):
        tree.insert_group_header("G1")
        tree.insert_group_header("G0", index=0)
        assert tree.group_names() == ["G0", "G1"]

    def test_insert_existing_header_raises(self, tree):
        tree.insert_group_header("G1")
        with pytest.raises(DuplicateNameError):
            tree.insert_group_header("G1")

    def test_add_items_normalizes_and_skips_duplicates(self, tree):
        tree.insert_group_header("G1")

        added = tree.add_items_to_group(["Prototypes/T1", "T1", "Instances", "T2/"], "G1")

        assert added == ["T1", "T2"]
        assert tree.items_in_group("G1") == ["T1", "T2"]
        assert tree.add_items_to_group(["T1"], "G1") == []

    def test_same_item_in_several_groups(self, tree):
        tree.insert_group_header("G1")
        tree.insert_group_header("G2")
        tree.add_items_to_group(["T1"], "G1")
        tree.add_items_to_group(["T1"], "G2")

        assert tree.items_in_group("G1") == ["T1"]
        assert tree.items_in_group("G2") == ["T1"]

    def test_add_items_to_missing_group_raises(self, tree):
        with pytest.raises(NotFoundError):
            tree.add_items_to_group(["T1"], "missing")

    def test_remove_subtree_cascades(self):
        tree, _ = build_tree([("G1", "T1"), ("G1", "T2"), ("G2", "T1")])

        removed = tree.remove_group_subtree(["G1", "missing"])

        assert removed == ["G1"]
        assert tree.group_names() == ["G2"]
        assert tree.definitions_from_tree() == [GroupRow("G2", "T1")]

    def test_remove_missing_subtree_is_noop(self, tree, history):
        assert tree.remove_group_subtree(["missing"]) == []
        assert not history.can_undo()

    def test_remove_subtree_undo_restores_position_and_selection(self):
        tree, history = build_tree([("A", ""), ("B", "T1"), ("C", "")])
        tree.select_groups(["B"])

        tree.remove_group_subtree(["B"])
        assert tree.selected_group_names() == []

        history.undo()
        assert tree.group_names() == ["A", "B", "C"]
        assert tree.items_in_group("B") == ["T1"]
        assert tree.selected_group_names() == ["B"]

    def test_remove_selected_items_keeps_headers(self):
        tree, _ = build_tree([("G1", "T1"), ("G1", "T2"), ("G2", "T1")])
        tree.select_nodes([("G1", "T1"), ("G1", "T2"), ("G2", "")])

        removed = tree.remove_selected_items()

        assert removed == [GroupRow("G1", "T1"), GroupRow("G1", "T2")]
        assert tree.group_names() == ["G1", "G2"]
        assert tree.items_in_group("G1") == []
        assert tree.selected_group_names() == ["G2"]
        assert tree.definitions_from_tree() == [GroupRow("G1", ""), GroupRow("G2", "T1")]

    def test_remove_selected_items_undo_restores_order(self):
        tree, history = build_tree([("G1", "T1"), ("G1", "T2"), ("G1", "T3")])
        tree.select_nodes([("G1", "T1"), ("G1", "T3")])

        tree.remove_selected_items()
        history.undo()

        assert tree.items_in_group("G1") == ["T1", "T2", "T3"]

    def test_rename_subtree(self):
        tree, _ = build_tree([("A", "T1"), ("B", "")])
        tree.select_nodes([("A", "T1")])

        tree.rename_group_subtree("A", "Z")

        assert tree.group_names() == ["Z", "B"]
        assert tree.items_in_group("Z") == ["T1"]
        assert tree.selected_items() == [("Z", "T1")]

    def test_rename_subtree_collision_raises(self):
        tree, _ = build_tree([("A", ""), ("B", "")])
        with pytest.raises(DuplicateNameError):
            tree.rename_group_subtree("A", "B")

    def test_copy_subtree_appends(self):
        tree, _ = build_tree([("A", "T1"), ("B", "")])

        tree.copy_group_subtree("A", "C")

        assert tree.group_names() == ["A", "B", "C"]
        assert tree.items_in_group("C") == ["T1"]

    def test_walk_document_order(self):
        tree, _ = build_tree([("G1", "T1"), ("G2", "")])
        assert list(tree.walk()) == [
            (GROUP_NODE_LEVEL, "G1", ""),
            (ITEM_NODE_LEVEL, "G1", "T1"),
            (GROUP_NODE_LEVEL, "G2", ""),
        ]


class TestItemToGroups:
    """Test the groups-containing-all-items lookup."""

    def setup_method(self):
        """Set up test fixtures."""
        self.tree, _ = build_tree(
            [
                ("G1", "x"),
                ("G1", "y"),
                ("G2", "x"),
                ("G3", "y"),
                ("G3", "z"),
                ("G3", "x"),
                ("G4", ""),
            ]
        )

    def test_groups_containing_all_items(self):
        assert self.tree.item_to_groups(["x", "y"]) == ["G1", "G3"]

    def test_single_item(self):
        assert self.tree.item_to_groups(["x"]) == ["G1", "G2", "G3"]

    def test_no_group_has_all(self):
        assert self.tree.item_to_groups(["x", "missing"]) == []

    def test_paths_are_normalized(self):
        assert self.tree.item_to_groups(["Prototypes/z", " y "]) == ["G3"]

    def test_empty_query(self):
        assert self.tree.item_to_groups([]) == []
        assert self.tree.item_to_groups(["Prototypes"]) == []

    def test_counter_resets_at_each_header(self):
        # x at the end of G2 and y at the start of G3 must not combine
        tree, _ = build_tree([("G2", "a"), ("G2", "x"), ("G3", "y"), ("G3", "b")])
        assert tree.item_to_groups(["x", "y"]) == []

    def test_repeated_query_item_counts_once(self):
        assert self.tree.item_to_groups(["z", "z"]) == ["G3"]


class TestMembershipTreeSelection:
    """Test selection handling."""

    def test_select_groups_ignores_unknown(self):
        tree, _ = build_tree([("G1", ""), ("G2", "")])
        tree.select_groups(["G2", "missing"])
        assert tree.selected_group_names() == ["G2"]

    def test_selection_order_follows_document(self):
        tree, _ = build_tree([("G1", ""), ("G2", ""), ("G3", "")])
        tree.select_groups(["G3", "G1"])
        assert tree.selected_group_names() == ["G1", "G3"]

    def test_selection_changed_signal_once_per_change(self):
        tree, _ = build_tree([("G1", "")])
        calls = []
        tree.selection_changed.connect(lambda: calls.append(True))

        tree.select_groups(["G1"])
        tree.select_groups(["G1"])
        tree.clear_selection()

        assert len(calls) == 2

    def test_selection_is_undoable(self):
        tree, history = build_tree([("G1", ""), ("G2", "")])
        tree.select_groups(["G1"])
        tree.select_groups(["G2"])

        history.undo()

        assert tree.selected_group_names() == ["G1"]


class TestDefinitionsFromTree:
    """Test group definition rows."""

    def test_rows(self):
        tree, _ = build_tree([("G1", "T1"), ("G1", "T2"), ("G2", "")])
        assert tree.definitions_from_tree() == [
            GroupRow("G1", "T1"),
            GroupRow("G1", "T2"),
            GroupRow("G2", ""),
        ]

    def test_empty_tree(self, tree):
        assert tree.definitions_from_tree() == []
