"""Expo Starter - scaffold a pre-configured Expo app in one command."""

__version__ = "1.2.0"
