"""Host adapters that copy editor state in and out of the engine."""
