"""LyricSensei - translation and pronunciation guides for song lyrics."""

__version__ = "1.0.0"
