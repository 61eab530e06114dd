"""Core infrastructure for scrub: paths, configuration and theming."""
