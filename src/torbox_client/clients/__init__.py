"""Service endpoints of the TorBox API"""

from .base import BaseService
from .general import GeneralService
from .search import SearchService

__all__ = ['BaseService', 'GeneralService', 'SearchService']
