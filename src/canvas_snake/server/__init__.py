"""HTTP and WebSocket surface for a game session."""
