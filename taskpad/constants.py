"""
Constants for record fields and task views.
"""
from __future__ import annotations

# Task status
STATUS_NOT_STARTED = "Not started"
STATUS_IN_PROGRESS = "In progress"
STATUS_COMPLETED = "Completed"
STATUS_OPTIONS = (STATUS_NOT_STARTED, STATUS_IN_PROGRESS, STATUS_COMPLETED)

# Task priority
PRIORITY_LOW = "Low"
PRIORITY_MEDIUM = "Medium"
PRIORITY_HIGH = "High"
PRIORITY_OPTIONS = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

# Effort level (optional)
EFFORT_OPTIONS = ("Small", "Medium", "Large")

# Task type tags offered by the form; any string is accepted by the store
TASK_TYPE_OPTIONS = ("Feature", "Bug", "Documentation", "Research", "Meeting", "Brain storm")

# Task views
TAB_ALL = "all"
TAB_NOT_STARTED = "not-started"
TAB_IN_PROGRESS = "in-progress"
TAB_COMPLETED = "completed"
TAB_KANBAN = "kanban"
TABS = (TAB_ALL, TAB_NOT_STARTED, TAB_IN_PROGRESS, TAB_COMPLETED, TAB_KANBAN)

TAB_STATUS = {
    TAB_NOT_STARTED: STATUS_NOT_STARTED,
    TAB_IN_PROGRESS: STATUS_IN_PROGRESS,
    TAB_COMPLETED: STATUS_COMPLETED,
}
