"""Module: tablegroups.config.features

Author: Michael Economou
Date: 2026-10-02

Undo/redo limits, item catalog layout and default data fields.
"""

# =====================================
# UNDO/REDO SYSTEM SETTINGS
# =====================================

UNDO_REDO_SETTINGS = {
    # Maximum number of compound sequences kept on the undo stack
    "MAX_UNDO_STEPS": 300,
    # Label used for sequences opened automatically by a single edit
    "AUTO_SEQUENCE_LABEL": "Edit",
}

# =====================================
# ITEM CATALOG
# =====================================

# Separator between the node names of a catalog path
ITEM_PATH_SEPARATOR = "/"

# Filter/category nodes of the table catalog. They group tables for display
# only and are never part of an item path stored in a group.
ITEM_CATEGORY_NODES = (
    "Prototypes",
    "Instances",
    "Structures",
    "Commands",
    "Other",
)

# =====================================
# DATA FIELDS
# =====================================

DEFAULT_FIELD_SIZE = 10

# Data fields added to a group when it is flagged as an application. Fields
# already present on the group (by name) are left untouched.
DEFAULT_APPLICATION_FIELDS = (
    {
        "field_name": "Schedule group",
        "description": "Application schedule group",
        "input_type": "TEXT",
        "size": 10,
        "value": "",
        "is_required": False,
    },
    {
        "field_name": "Execution frequency",
        "description": "Application execution frequency (Hz)",
        "input_type": "FLOAT",
        "size": 6,
        "value": "1",
        "is_required": True,
    },
    {
        "field_name": "Execution priority",
        "description": "Application execution priority",
        "input_type": "NON_NEGATIVE_INTEGER",
        "size": 4,
        "value": "1",
        "is_required": True,
    },
    {
        "field_name": "Execution time",
        "description": "Application execution time (ms)",
        "input_type": "NON_NEGATIVE_INTEGER",
        "size": 6,
        "value": "1",
        "is_required": False,
    },
    {
        "field_name": "Wake-up message name & ID",
        "description": "Application wake-up message name and ID",
        "input_type": "MESSAGE_NAME_AND_ID",
        "size": 20,
        "value": "",
        "is_required": False,
    },
)
