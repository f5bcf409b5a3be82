"""Post-simulation summaries: positional and per-strategy averages."""
