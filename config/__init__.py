"""Configuration for the gpio tool. See config/settings.py."""
