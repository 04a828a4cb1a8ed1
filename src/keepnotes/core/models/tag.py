# Tag row
from .base import OwnedRecord


class Tag(OwnedRecord):
    """Owner-scoped label. Names are not required to be unique."""

    name: str
