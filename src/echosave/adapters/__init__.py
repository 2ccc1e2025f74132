"""Host adapters for EchoSave."""
