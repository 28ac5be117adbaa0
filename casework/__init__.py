"""Casework: document certification workflow for immigration cases."""
