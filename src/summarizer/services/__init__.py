"""Upstream collaborators: the summary model client."""
