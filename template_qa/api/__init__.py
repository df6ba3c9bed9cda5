"""HTTP adapter over the template validation engine."""
