"""Parser for Keeper secret notation: ``[keeper://]uid/category/key[predicate]``.

A notation names one field or file attachment inside a vault record::

    keeper://XXXXXXXXXXXXXXXXXXXXXX/field/password
    XXXXXXXXXXXXXXXXXXXXXX/custom_field/phone[1][number]
    XXXXXXXXXXXXXXXXXXXXXX/file/id_rsa.pub

The parser only checks the grammar so that users get a targeted error before
any network round trip. Whether the record or field exists is up to the vault.
"""

import re
from dataclasses import dataclass, field
from enum import StrEnum

PREFIX = "keeper"
SCHEME_SEPARATOR = "//"
UID_LENGTH = 22
INDEX_MIN = -(2**31)
INDEX_MAX = 2**31 - 1

_INDEX = re.compile(r"[+-]?\d+")
_DICT_KEY = re.compile(r"[a-zA-Z0-9_]+")


class FieldCategory(StrEnum):
    FIELD = "field"
    CUSTOM_FIELD = "custom_field"
    FILE = "file"


class NotationError(ValueError):
    """Raised when a notation string doesn't follow the grammar."""


class MalformedSchemeError(NotationError):
    """The keeper prefix isn't followed by a usable // separator."""


class SegmentCountError(NotationError):
    """The notation doesn't split into exactly uid/category/key."""

    def __init__(
        self, message: str, *, too_many: bool, misspelled_prefix: bool = False
    ) -> None:
        super().__init__(message)
        self.too_many = too_many
        self.misspelled_prefix = misspelled_prefix


class InvalidUidError(NotationError):
    """The record uid isn't 22 characters long."""


class InvalidCategoryError(NotationError):
    """The category isn't field, custom_field, or file."""


class PredicateSyntaxError(NotationError):
    """The bracketed selectors after the field key are malformed."""


@dataclass
class NotationReference:
    """A parsed notation, plus the value once it has been resolved."""

    raw_notation: str
    record_uid: str
    field_category: FieldCategory
    field_key: str
    return_single: bool = True
    array_index: int = 0
    dict_key: str | None = None
    resolved_value: str | None = field(default=None, compare=False, repr=False)

    def remember(self, value: str) -> None:
        """Store the resolved value. It can only be set once."""
        if self.resolved_value is not None:
            raise RuntimeError(f"{self.raw_notation!r} has already been resolved")
        self.resolved_value = value


def _split(text: str, separator: str) -> list[str]:
    """Split on a separator, dropping trailing empty pieces."""
    parts = text.split(separator)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def _is_index(value: str) -> bool:
    # Numbers outside 32-bit range fall through to dictionary keys
    if _INDEX.fullmatch(value) is None:
        return False
    return INDEX_MIN <= int(value) <= INDEX_MAX


def _is_dict_key(value: str) -> bool:
    return _DICT_KEY.fullmatch(value) is not None


def parse(notation: str) -> NotationReference:
    """Parse a notation string into a NotationReference.

    Raises a NotationError subclass naming the rule that was broken.
    """
    if notation.startswith(PREFIX):
        scheme_parts = _split(notation, SCHEME_SEPARATOR)
        if len(scheme_parts) < 2:
            raise MalformedSchemeError(
                "Notation is missing information about the uid, field data type, "
                "and field key."
            )
        notation = scheme_parts[1]

    parts = _split(notation, "/")
    if len(parts) < 3:
        raise SegmentCountError(
            "Notation format appears to be missing values. "
            "There should be 3 values separated by a '/' character.",
            too_many=False,
        )
    if len(parts) > 3:
        msg = (
            "Notation format appears to contain too many values. "
            "There should be 3 values separated by a '/' character."
        )
        misspelled = notation.startswith(PREFIX[0])
        if misspelled:
            msg += "  The keeper:// prefix might be misspelled."
        raise SegmentCountError(msg, too_many=True, misspelled_prefix=misspelled)

    uid, category, field_key = parts

    if len(uid) != UID_LENGTH:
        raise InvalidUidError("The record uid is not the correct length.")

    try:
        field_category = FieldCategory(category.lower())
    except ValueError:
        raise InvalidCategoryError(
            "The field type can only be field, custom_field, or file. "
            f"The field type of {category} is invalid."
        ) from None

    return_single = True
    index = 0
    dict_key: str | None = None

    field_key, bracket, rest = field_key.partition("[")
    if bracket:
        predicates = _split(bracket + rest, "]")
        if len(predicates) > 2:
            raise PredicateSyntaxError(
                "The predicate of the notation appears to be invalid. "
                "Too many [], max 2 allowed."
            )

        first = predicates[0][1:]
        if first == "":
            return_single = False
        elif _is_index(first):
            index = int(first)
        elif _is_dict_key(first):
            dict_key = first
        # Anything else is ignored and leaves index 0 with no dict key.

        if len(predicates) == 2:
            second = predicates[1][1:]
            if not return_single or index != 0:
                raise PredicateSyntaxError(
                    "If the second [] is a dictionary key, "
                    "the first [] needs to have any index."
                )
            if _is_index(second):
                raise PredicateSyntaxError(
                    "The second [] must be a key for the dictionary, not an index."
                )
            if not _is_dict_key(second):
                raise PredicateSyntaxError(
                    "The second [] must have key for the dictionary. "
                    "Cannot be blank."
                )
            dict_key = second

    return NotationReference(
        raw_notation=notation,
        record_uid=uid,
        field_category=field_category,
        field_key=field_key,
        return_single=return_single,
        array_index=index,
        dict_key=dict_key,
    )
