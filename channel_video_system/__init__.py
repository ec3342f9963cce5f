"""
Channel Video System

Keeps a local catalog of videos published to a Telegram channel and resolves
stable video ids to short-lived download URLs.
"""

__version__ = "1.0.0"
