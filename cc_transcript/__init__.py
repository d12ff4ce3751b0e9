"""
cc-transcript: view Claude Code session transcripts and export them as API messages.
"""
