"""Test fixtures and sample data."""

SAMPLE_IMAGE_URL = "https://example.com/images/cat.png"

SAMPLE_TEXT = "The quick brown fox"
