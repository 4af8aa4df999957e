"""Console helpers: input validation and output rendering."""
