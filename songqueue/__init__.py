"""Collaborative hackathon song queue backed by Spotify."""

__version__ = "0.1.0"
