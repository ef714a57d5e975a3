"""Small helpers shared across Skygrip."""
