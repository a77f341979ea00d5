"""Core infrastructure: XDG paths, configuration and theming."""
