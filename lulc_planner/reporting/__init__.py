"""Terminal formatters and file exports for planning snapshots."""
