"""Terminal rendering of query results."""
