# taskboard/__init__.py
"""
Taskboard - personal task tracking over a hosted document database.
"""
__version__ = "1.0.0"
