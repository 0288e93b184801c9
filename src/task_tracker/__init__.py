"""
Command-line task tracker backed by a single JSON file.

Layout:
- tasks/: Task model, JSON TaskStore, high-level task operations
- cli/: command registry and the `task-cli` entry point
- config.py / logging_setup.py / errors.py: settings, logging, error types
"""
