"""Text analysis tools: phrase frequency ranking and report formatting."""
