"""yatta: a personal task tracker that notifies you when tasks become due."""

__version__ = "0.1.0"
