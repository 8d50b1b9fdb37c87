"""HTTP surface for the Ideaboard application."""
