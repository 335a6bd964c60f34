"""Tests for configuration models."""

from __future__ import annotations

import pytest

from chisel.models.config import ChiselConfig, HistoryConfig, TokenConfig


class TestHistoryConfig:
    def test_default_depth(self) -> None:
        assert HistoryConfig().max_depth == 50

    def test_unbounded(self) -> None:
        assert HistoryConfig(max_depth=None).max_depth is None

    def test_bounds_enforced(self) -> None:
        with pytest.raises(ValueError):
            HistoryConfig(max_depth=0)  # below ge=1


class TestTokenConfig:
    def test_defaults(self) -> None:
        cfg = TokenConfig()
        assert cfg.encoding == "heuristic"
        assert cfg.chars_per_token == 4

    def test_unknown_encoding_rejected(self) -> None:
        with pytest.raises(ValueError):
            TokenConfig(encoding="p50k_base")  # type: ignore[arg-type]

    def test_chars_per_token_bounds(self) -> None:
        with pytest.raises(ValueError):
            TokenConfig(chars_per_token=0)
        with pytest.raises(ValueError):
            TokenConfig(chars_per_token=17)


class TestChiselConfig:
    def test_default(self) -> None:
        cfg = ChiselConfig.default()
        assert isinstance(cfg.history, HistoryConfig)
        assert isinstance(cfg.tokens, TokenConfig)

    def test_override_sub_config(self) -> None:
        cfg = ChiselConfig(history=HistoryConfig(max_depth=5))
        assert cfg.history.max_depth == 5
        assert cfg.tokens.encoding == "heuristic"

    def test_from_dict(self) -> None:
        cfg = ChiselConfig.model_validate({"tokens": {"encoding": "cl100k_base"}})
        assert cfg.tokens.encoding == "cl100k_base"
