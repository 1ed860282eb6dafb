"""Core application services: paths, settings, theming, and cleanup sessions."""
