"""Infrastructure adapters for the preprint recommender."""
