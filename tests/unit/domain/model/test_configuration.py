"""Tests for domain/model/configuration.py."""

import pytest

from blockfilter.domain.exceptions.config import InvalidConfigError
from blockfilter.domain.model.configuration import FilterConfig
from blockfilter.domain.model.enums import EvaluationErrorPolicy


class TestFilterConfig:
    """Tests for FilterConfig."""

    def test_defaults(self) -> None:
        config = FilterConfig()

        assert config.include_expr == ""
        assert config.exclude_expr == ""
        assert config.on_evaluation_error is EvaluationErrorPolicy.PROPAGATE

    def test_frozen(self) -> None:
        config = FilterConfig()
        with pytest.raises(AttributeError):
            config.include_expr = "input"  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("kwargs", "field"),
        [
            ({"include_expr": None}, "include_expr"),
            ({"exclude_expr": 1}, "exclude_expr"),
            ({"on_evaluation_error": "propagate"}, "on_evaluation_error"),
        ],
    )
    def test_invalid_values_raise(self, kwargs: dict[str, object], field: str) -> None:
        with pytest.raises(InvalidConfigError) as exc_info:
            FilterConfig(**kwargs)  # type: ignore[arg-type]
        assert exc_info.value.field == field

    def test_invalid_config_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            FilterConfig(include_expr=None)  # type: ignore[arg-type]
