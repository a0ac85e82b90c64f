# backend/storefront/models/__init__.py
from .admin import Admin
from .category import Category
from .artist import Artist
from .artwork import Artwork  # References Category and Artist
from .order import Order  # References Artwork
from .feedback import Feedback
