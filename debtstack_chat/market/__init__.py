"""Market data shown alongside the chat."""
