"""HTTP API for listing sinks and switching the default."""
