"""Version information for the ContextAnchor client"""

__version__ = "0.1.0"
