"""
TeleFrame addon host: addon loading, event routing and addon control
"""

__version__ = "0.1.0"
