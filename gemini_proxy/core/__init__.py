"""Core utilities shared across gemini-proxy modules."""
