"""HTTP layer: transport, request dispatch and wire models."""
