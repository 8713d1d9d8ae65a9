"""
Optimist CLI - optimistic transition engine tooling

Commands:
- optimist simulate - Run an action script through the optimistic reducer
- optimist version - Show version information
"""

__version__ = "0.1.0"
