"""Console presentation layer for the contact book."""
