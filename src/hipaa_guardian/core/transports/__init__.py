"""Protocol transports for the guardian server."""
