"""
Alert formatting models.
"""

import hashlib
from dataclasses import dataclass, field
from typing import List


@dataclass
class FormattedAlert:
    """Formatted alert ready for delivery."""

    title: str
    message: str
    tags: List[str] = field(default_factory=list)

    @property
    def content_hash(self) -> str:
        """SHA-256 hex digest of the rendered message body."""
        return hashlib.sha256(self.message.encode("utf-8")).hexdigest()

    def validate(self) -> bool:
        """Validate formatted alert data."""
        if not isinstance(self.title, str):
            raise ValueError("title must be a string")

        if not self.title.strip():
            raise ValueError("title cannot be empty")

        if len(self.title) > 200:
            raise ValueError("title too long (max 200 characters)")

        if not isinstance(self.message, str):
            raise ValueError("message must be a string")

        if not self.message.strip():
            raise ValueError("message cannot be empty")

        if len(self.message) > 4000:
            raise ValueError("message too long (max 4000 characters)")

        if not isinstance(self.tags, list):
            raise ValueError("tags must be a list")

        return True
