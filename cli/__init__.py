"""jcrpack command-line interface."""
