"""Unit tests for LendingConfig validation."""

import pytest

from lending_core.config import (
    DEFAULT_LOAN_PERIOD_DAYS,
    DEFAULT_MAX_ACTIVE_RESERVATIONS,
    DEFAULT_QUERY_CACHE_SIZE,
    LendingConfig,
)
from lending_core.exceptions import CacheConfigError


class TestLendingConfigDefaults:
    """Default values."""

    def test_defaults(self):
        config = LendingConfig()

        assert config.query_cache_size == DEFAULT_QUERY_CACHE_SIZE == 50
        assert config.loan_period_days == DEFAULT_LOAN_PERIOD_DAYS == 14
        assert config.max_active_reservations == DEFAULT_MAX_ACTIVE_RESERVATIONS == 3
        assert config.track_pool_holders is False
        assert config.metrics_enabled is True
        assert config.enable_prometheus is False
        assert config.prometheus_host == "127.0.0.1"
        assert config.prometheus_port == 9090


class TestLendingConfigValidation:
    """__post_init__ validation."""

    @pytest.mark.parametrize("size", [0, -1])
    def test_cache_size_must_be_positive(self, size):
        with pytest.raises(CacheConfigError) as exc_info:
            LendingConfig(query_cache_size=size)
        assert exc_info.value.capacity == size

    def test_cache_size_one_is_allowed(self):
        assert LendingConfig(query_cache_size=1).query_cache_size == 1

    def test_loan_period_must_be_positive(self):
        with pytest.raises(ValueError, match="loan_period_days"):
            LendingConfig(loan_period_days=0)

    def test_max_active_reservations_must_be_positive(self):
        with pytest.raises(ValueError, match="max_active_reservations"):
            LendingConfig(max_active_reservations=0)

    @pytest.mark.parametrize("port", [0, 65536, -80])
    def test_prometheus_port_range(self, port):
        with pytest.raises(ValueError, match="prometheus_port"):
            LendingConfig(prometheus_port=port)
