"""Taskflow CLI - personal task and project tracker."""

__version__ = "0.4.0"
