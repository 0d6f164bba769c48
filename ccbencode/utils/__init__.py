"""Utility modules for ccbencode."""
