"""Console helpers shared by the CLI commands and logging."""
