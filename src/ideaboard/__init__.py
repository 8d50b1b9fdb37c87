"""Ideaboard: submit ideas, collect peer feedback and star ratings."""

__version__ = "0.1.0"
