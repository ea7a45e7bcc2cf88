"""User-facing interfaces of the preprint recommender."""
