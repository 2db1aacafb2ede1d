"""
Task list core.

Components:
- models.py: data structures (TaskRecord, TaskStatus, Priority, ViewMode)
- task_store.py: in-memory ordered list with positional ids
- search.py / selection.py: filtered view and the cursor over it
- fields.py / dialogs.py: parsing and the add/edit question sequences
- render.py: text projection of the state for the three views
"""
