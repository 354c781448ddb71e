"""Key-value store exports."""

from .models import StoreScope
from .repository import StoreRepository
from .service import SETUP_FLAG_KEY, OneTimeRunFlag, ScopedStore

__all__ = ["OneTimeRunFlag", "SETUP_FLAG_KEY", "ScopedStore", "StoreRepository", "StoreScope"]
