"""Discord binding: slash commands, member events, and role mutation.

Only this package imports :mod:`discord`.
"""
