"""Resolve a parsed notation into its secret value."""

import logging

from keeper_notation.client import VaultClient
from keeper_notation.notation import FieldCategory, NotationReference

log = logging.getLogger(__name__)


class ResolutionError(Exception):
    """Raised when the vault can't produce a value for a notation."""


async def resolve(ref: NotationReference, client: VaultClient) -> str:
    """Fetch the referenced record and return the selected value.

    The value is remembered on the reference, so resolving the same
    reference again doesn't go back to the vault. File attachments are
    assumed to hold UTF-8 text, such as a private key.
    """
    if ref.resolved_value is not None:
        return ref.resolved_value

    try:
        records = await client.fetch_records([ref.record_uid])
        if ref.field_category is FieldCategory.FILE:
            file = await client.locate_file(records, ref.raw_notation)
            value = (await client.download_file(file)).decode("utf-8")
        else:
            value = await client.get_value(records, ref.raw_notation)
    except UnicodeDecodeError as e:
        raise ResolutionError(
            f"File for {ref.raw_notation!r} is not UTF-8 text: {e}"
        ) from e
    except Exception as e:
        raise ResolutionError(f"Could not resolve {ref.raw_notation!r}: {e}") from e

    log.debug("Resolved %r", ref.raw_notation)
    ref.remember(value)
    return value
