"""Token estimation with a character heuristic and optional tiktoken encodings."""

from __future__ import annotations

from typing import Any

import structlog

from chisel.models.config import TokenConfig


class TokenEstimator:
    """
    Deterministic token counting for before/after compression comparisons.

    Priority order:
    1. tiktoken when ``TokenConfig.encoding`` names a tiktoken encoding
    2. Character-based heuristic (``len // chars_per_token``) otherwise, or
       when the encoding cannot be loaded

    Counts are approximate and only meant for relative comparison. Encoder
    objects are cached by encoding name (one load per process per estimator).
    """

    def __init__(self, config: TokenConfig | None = None) -> None:
        self._config = config or TokenConfig()
        self._encoder_cache: dict[str, Any] = {}
        self._force_heuristic: bool = False
        """Set to True in tests to skip tiktoken import."""
        self._logger = structlog.get_logger("chisel.tokens")

    def __call__(self, text: str) -> int:
        return self.estimate(text)

    def estimate(self, text: str) -> int:
        """
        Estimate the token count for a string.

        Args:
            text: The text to estimate.

        Returns:
            ``0`` for empty text, otherwise an estimate that is always >= 1.
        """
        if not text:
            return 0

        encoding = self._config.encoding
        if self._force_heuristic or encoding == "heuristic":
            return self._heuristic(text)
        try:
            return self._tiktoken_estimate(text, encoding)
        except Exception as exc:
            self._logger.warning("tiktoken_unavailable", encoding=encoding, error=str(exc))
            self._force_heuristic = True
        return self._heuristic(text)

    def _heuristic(self, text: str) -> int:
        """Conservative heuristic: ``chars_per_token`` characters per token, minimum 1."""
        return max(1, len(text) // self._config.chars_per_token)

    def _tiktoken_estimate(self, text: str, encoding_name: str) -> int:
        """Encode with tiktoken, caching the encoder object."""
        if encoding_name not in self._encoder_cache:
            import tiktoken

            self._encoder_cache[encoding_name] = tiktoken.get_encoding(encoding_name)
        encoder = self._encoder_cache[encoding_name]
        return len(encoder.encode(text))
