"""lhpipe command-line interface."""
