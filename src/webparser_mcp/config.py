"""Payload-size limits applied during extraction.

Large pages can yield thousands of links or sentences. These caps bound the
size of every result; they are policy, not derived from the input.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields

logger = logging.getLogger(__name__)

ENV_PREFIX = "WEBPARSER_"


@dataclass(frozen=True)
class ExtractionLimits:
    """Caps and constants used by the extractor.

    Every value must be a positive integer; anything else raises ValueError.
    """

    max_links: int = 100
    link_text_length: int = 100
    max_headings_per_level: int = 20
    max_images: int = 50
    max_sentences: int = 50
    min_sentence_length: int = 10
    text_sample_length: int = 1000
    words_per_minute: int = 200

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{f.name} must be a positive integer, got {value!r}")

    @classmethod
    def from_env(cls) -> ExtractionLimits:
        """Build limits from ``WEBPARSER_<NAME>`` environment variables.

        Missing variables keep their defaults. Values that are not positive
        integers are ignored with a warning.

        Returns:
            ExtractionLimits populated from the environment
        """
        overrides: dict[str, int] = {}
        for f in fields(cls):
            env_name = f"{ENV_PREFIX}{f.name.upper()}"
            raw = os.getenv(env_name)
            if raw is None:
                continue
            try:
                value = int(raw)
            except ValueError:
                logger.warning(f"Ignoring {env_name}={raw!r}: not an integer")
                continue
            if value <= 0:
                logger.warning(f"Ignoring {env_name}={raw!r}: must be positive")
                continue
            overrides[f.name] = value
        return cls(**overrides)

    def to_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


LIMIT_KEYS = tuple(f.name for f in fields(ExtractionLimits))
