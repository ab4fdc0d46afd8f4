"""Core interfaces shared by the task subsystem and its front ends."""
