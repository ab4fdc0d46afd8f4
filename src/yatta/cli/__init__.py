"""Command-line front end: bootstrap, slash commands, console REPL, entrypoint."""
