"""Command implementations behind the gtd CLI."""
