"""Unit tests for AnalyticsConfig."""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from tradelens.libraries.performance.breakdown import DIRECTION, SESSION
from tradelens.services.analytics.config import AnalyticsConfig
from tradelens.system.config import AnalyticsSettings


class TestAnalyticsConfig:
    """Test configuration validation."""

    def test_defaults(self):
        """Default capital, range and dimensions."""
        config = AnalyticsConfig()

        assert config.starting_capital == Decimal("100")
        assert config.default_time_range == "7days"
        assert config.dimensions == ["strategy", "session", "direction"]

    def test_negative_capital_rejected(self):
        """Starting capital cannot be negative."""
        with pytest.raises(ValidationError):
            AnalyticsConfig(starting_capital=Decimal("-1"))

    def test_time_range_normalized(self):
        """Tokens are lowercased; 'all' means no range."""
        assert AnalyticsConfig(default_time_range=" 30DAYS ").default_time_range == "30days"
        assert AnalyticsConfig(default_time_range="all").default_time_range == ""

    def test_unknown_time_range(self):
        """Unknown tokens are rejected at load time."""
        with pytest.raises(ValidationError, match="Unknown time range"):
            AnalyticsConfig(default_time_range="90days")

    def test_dimensions_resolved(self):
        """Names resolve to built-in dimensions in order."""
        config = AnalyticsConfig(dimensions=["Session", "direction"])

        assert config.get_dimensions() == [SESSION, DIRECTION]

    def test_unknown_dimension(self):
        """Unknown dimension names are rejected."""
        with pytest.raises(ValidationError, match="Unknown dimensions"):
            AnalyticsConfig(dimensions=["strategy", "mood"])

    def test_duplicate_dimension(self):
        """Dimensions may appear only once."""
        with pytest.raises(ValidationError, match="Duplicate"):
            AnalyticsConfig(dimensions=["session", "SESSION"])

    def test_from_settings(self):
        """System config section converts to AnalyticsConfig."""
        settings = AnalyticsSettings(starting_capital="5000", default_time_range="today", dimensions=["account"])

        config = AnalyticsConfig.from_settings(settings)

        assert config.starting_capital == Decimal("5000")
        assert config.default_time_range == "today"
        assert config.dimensions == ["account"]

    def test_from_settings_with_overrides(self):
        """Overrides win over the file values and are validated."""
        settings = AnalyticsSettings(starting_capital="5000", dimensions=["account"])

        config = AnalyticsConfig.from_settings(settings, starting_capital=Decimal("250"), dimensions=["Session"])

        assert config.starting_capital == Decimal("250")
        assert config.default_time_range == "7days"
        assert config.dimensions == ["session"]

    def test_from_settings_rejects_duplicate_override(self):
        """Overridden dimensions go through the same checks."""
        with pytest.raises(ValidationError, match="Duplicate"):
            AnalyticsConfig.from_settings(AnalyticsSettings(), dimensions=["session", "session"])
