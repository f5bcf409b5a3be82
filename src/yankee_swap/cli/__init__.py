"""Command line front door for :mod:`yankee_swap`."""
