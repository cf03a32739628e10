"""
TaskPilot task extraction core.

Turns free-form document text into a structured, rich-text task list.
"""

__version__ = "0.1.0"
