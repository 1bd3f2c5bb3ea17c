"""User directory API."""
