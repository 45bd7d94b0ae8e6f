"""Terminal UI helpers built on rich."""
