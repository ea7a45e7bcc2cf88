"""Allow ``python -m preprint_recommender``."""

from preprint_recommender.interfaces.cli import cli

if __name__ == "__main__":
    cli()
