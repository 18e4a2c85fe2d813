"""whitelink: keep Discord members, their linked role, and a Minecraft whitelist in sync."""

__version__ = "0.3.0"
