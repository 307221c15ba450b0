"""Pygame rendering for the matrix snake game."""
