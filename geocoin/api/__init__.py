"""REST API exposing a GameSession to a map client."""
