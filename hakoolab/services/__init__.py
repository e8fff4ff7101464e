"""
HakooLab Services
Favorites and calculation history persistence
"""

from .favorites import FavoritesStore, FavoriteItem
from .history import CalculationHistory

__all__ = [
    'FavoritesStore',
    'FavoriteItem',
    'CalculationHistory',
]
