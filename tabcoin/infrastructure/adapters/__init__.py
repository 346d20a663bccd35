"""Adapters implementing application ports against real infrastructure."""
