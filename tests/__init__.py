"""Step sidebar test suite."""
