"""Raspador de las tablas de salas y causas del Poder Judicial de Chile."""
from .client import PJUDScraper

__all__ = ["PJUDScraper"]
