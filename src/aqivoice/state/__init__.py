"""State layer.

Per-session state: the voice-trigger gate, the last device coordinate and
the cached reading. Nothing in here is shared between sessions.
"""
