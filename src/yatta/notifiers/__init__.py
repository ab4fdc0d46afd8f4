"""
Notifiers: delivery side of the due-task stream.

- console_notifier.py: prints a timestamped line to stdout
- log_notifier.py: writes an INFO log record
"""
