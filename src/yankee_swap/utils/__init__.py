"""Small, dependency-light helpers shared across :mod:`yankee_swap`."""
