"""Tests for emlkit_core.errors."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from emlkit_core.errors import BaseEmlError, CoreErrorCode


class TestCoreErrorCode:
    def test_codes_prefixed(self):
        """All codes start with E_ (fatal) or W_ (warning)."""
        for code in CoreErrorCode:
            assert code.value.startswith(("E_", "W_")), code.name

    def test_values_match_names(self):
        for code in CoreErrorCode:
            assert code.value == code.name

    def test_is_str_enum(self):
        assert isinstance(CoreErrorCode.E_WRITE_FAILED, str)


class TestBaseEmlError:
    def test_defaults(self):
        err = BaseEmlError(code="E_WRITE_FAILED", message="disk full")
        assert err.stage is None
        assert err.recoverable is False

    def test_accepts_enum_code(self):
        err = BaseEmlError(code=CoreErrorCode.W_DUPLICATE_SKIPPED, message="dup")
        assert err.code == "W_DUPLICATE_SKIPPED"

    def test_requires_message(self):
        with pytest.raises(ValidationError):
            BaseEmlError(code="E_WRITE_FAILED")

    def test_serialisation_round_trip(self):
        err = BaseEmlError(code="E_INPUT_INVALID", message="bad", stage="validate")
        assert BaseEmlError.model_validate(err.model_dump()) == err
