"""
todosync - Hand todos between users and keep both sides in sync.
"""

__version__ = "0.1.0"
