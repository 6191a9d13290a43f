"""Controllers that sit between the presentation layer and the core."""
