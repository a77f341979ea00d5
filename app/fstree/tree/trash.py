"""Trash tokens for soft-deleted entries.

A soft-deleted entry is moved into the trash directory and renamed to a
token that records where it came from and when it was deleted. The token
is the JSON form of a TrashRecord in URL-safe base64, so it never contains
a path separator. The trash directory holds no other metadata.
"""

import base64
import binascii
import logging
import os
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, ValidationError

from fstree.tree.errors import TrashDecodeError
from fstree.tree.nodes import Node

logger = logging.getLogger(__name__)


class TrashRecord(BaseModel):
    """Where a trashed entry came from and when it was deleted.

    Attributes:
        original_path: Absolute path the entry had before deletion.
        deleted_at: Moment of the soft delete.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    original_path: str
    deleted_at: datetime


def encode(original_path: str, deleted_at: datetime) -> str:
    """Encode a trash record into a filename-safe token.

    Args:
        original_path: Path of the entry before deletion.
        deleted_at: Deletion timestamp.

    Returns:
        Token usable as a filename.
    """
    record = TrashRecord(original_path=original_path, deleted_at=deleted_at)
    return base64.urlsafe_b64encode(record.model_dump_json().encode("utf-8")).decode("ascii")


def decode(token: str) -> TrashRecord:
    """Decode a token produced by encode().

    Args:
        token: Trash token (a filename inside the trash directory).

    Returns:
        The decoded TrashRecord.

    Raises:
        TrashDecodeError: If the token isn't valid base64 or doesn't hold a record.
    """
    try:
        raw = base64.b64decode(token.encode("ascii"), altchars=b"-_", validate=True)
    except (UnicodeEncodeError, binascii.Error) as e:
        msg = f"Invalid trash token {token!r}: {e}"
        raise TrashDecodeError(msg) from e
    try:
        return TrashRecord.model_validate_json(raw)
    except ValidationError as e:
        msg = f"Invalid trash record in token {token!r}: {e}"
        raise TrashDecodeError(msg) from e


def new_token(original_path: str) -> str:
    """Encode a record for an entry deleted right now."""
    return encode(original_path, datetime.now(UTC))


def is_in_trash(node: Node, trash_dir: str | os.PathLike[str]) -> bool:
    """Check whether a node lives directly inside the trash directory."""
    return os.path.abspath(node.dirname) == os.path.abspath(os.fspath(trash_dir))


def original_path_of(node: Node, trash_dir: str | os.PathLike[str]) -> str:
    """Name to display for a node.

    Outside the trash this is the node's own name. Inside the trash it is
    the recorded original path, or the raw name when the token is
    corrupted. Decoding errors are never raised from here.
    """
    if not is_in_trash(node, trash_dir):
        return node.name
    try:
        return decode(node.name).original_path
    except TrashDecodeError as e:
        logger.warning("Undecodable trash entry %s: %s", node.path, e)
        return node.name
