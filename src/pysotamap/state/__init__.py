"""State/store layer.

This package is the single place where candidate updates from the chat
log and the snapshot file are merged into one :class:`PlayerState`.
"""
