"""modules: the planning engine's components, grouped by concern."""
