"""Page registry, searchable sections, wallpaper thumbnails and system information for a settings panel."""

__version__ = "0.1.0"

__all__ = ["about", "binder", "section", "wallpaper"]