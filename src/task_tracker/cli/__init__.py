"""Command-line layer: verb registry (commands.py) and entry point (main.py)."""
