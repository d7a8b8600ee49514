"""Widget context, host ports and lifecycle."""
