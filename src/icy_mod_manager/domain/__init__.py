"""Domain types shared across the application."""
