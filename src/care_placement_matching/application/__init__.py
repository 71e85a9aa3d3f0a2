"""Application use cases that assemble inputs and run the matcher."""
