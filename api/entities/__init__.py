"""
Entity mapping between persisted rows and API rows.
"""

from .mappers import MAPPERS, get_mapper, map_api_to_db, map_row_to_api

__all__ = ["MAPPERS", "get_mapper", "map_api_to_db", "map_row_to_api"]
