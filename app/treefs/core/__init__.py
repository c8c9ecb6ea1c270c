"""Core infrastructure for treefs: paths, configuration and theming."""
