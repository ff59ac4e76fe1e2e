"""Module: tablegroups.config.app

Author: Michael Economou
Date: 2026-10-02

Application-level configuration: app info, dialog title, logging settings.
"""

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "tablegroups"
APP_VERSION = "1.0.0"

# Title shown by the group manager window; the change indicator is appended
# while there are uncommitted changes
DIALOG_TITLE = "Manage Groups"
CHANGE_INDICATOR = "*"

# =====================================
# LOGGING CONFIGURATION
# =====================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"

# File logging
LOG_FILE_MAX_BYTES = 10_000_000  # 10MB per file
LOG_FILE_BACKUP_COUNT = 5

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False
