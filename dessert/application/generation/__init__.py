"""Test generation services for dessert."""
