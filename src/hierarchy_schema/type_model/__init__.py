"""Type model exports."""

from .catalog_reader import CatalogError, load_type_catalog, parse_type_catalog
from .type_descriptors import FlattenPolicy, MemberDescriptor, TypeDescriptor, TypeKind

__all__ = [
    "CatalogError",
    "FlattenPolicy",
    "MemberDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "load_type_catalog",
    "parse_type_catalog",
]
