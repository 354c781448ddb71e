"""Content server: media uploads, one-time seeding and marketing forms."""

__version__ = "1.0.0"
