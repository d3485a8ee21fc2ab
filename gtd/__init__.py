"""gtd - structural validator for a Markdown task-management corpus."""

__version__ = "0.3.0"
