"""Command-line interface for contact-curator (``contact-curator``)."""

from contact_curator.cli.app import app

__all__ = ["app"]
