"""Venue opening hours service."""
