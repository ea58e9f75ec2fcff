from keeper_notation.notation import FieldCategory, NotationReference, parse
from keeper_notation.resolver import ResolutionError, resolve
from keeper_notation.vault import KeeperVault, create_vault

__all__ = [
    "FieldCategory",
    "KeeperVault",
    "NotationReference",
    "ResolutionError",
    "create_vault",
    "parse",
    "resolve",
]
