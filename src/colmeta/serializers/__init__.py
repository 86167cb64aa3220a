"""Serializer utilities for converting between dicts and colmeta models."""

from .column_deserializer import ColumnDeserializer

__all__ = ["ColumnDeserializer"]
