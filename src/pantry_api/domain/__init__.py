"""Domain models and pure computations."""
