"""HTTP server surface for EchoSave."""
