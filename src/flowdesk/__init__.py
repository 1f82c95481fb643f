"""flowdesk - task timers and optimistic Kanban board state."""

__version__ = "0.1.0"
