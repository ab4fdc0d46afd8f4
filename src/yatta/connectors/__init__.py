"""Front-end connectors that map user input onto task manager calls."""
