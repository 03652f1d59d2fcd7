"""Admin pages: component registry, page layout and submitted profiles"""

from .routes import admin_bp

__all__ = ['admin_bp']
