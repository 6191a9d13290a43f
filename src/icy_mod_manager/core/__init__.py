"""Core logic for Icy Isaac Mod Manager."""
