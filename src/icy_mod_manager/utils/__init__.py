"""Utility helpers for Icy Isaac Mod Manager."""
