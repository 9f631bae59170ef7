"""Command modules for the Taskflow CLI."""
