"""State/store layer.

This package is the single source of truth for the local replica of the
battlefield: every decoded ``READY`` and ``BOT`` message is merged here,
and strategies only ever read immutable snapshots of it.
"""
