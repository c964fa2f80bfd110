"""depgraph command-line interface."""
