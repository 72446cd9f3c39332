# tests/sources/test_source_config.py
"""Tests for data source configuration base classes."""

import pytest
from pydantic import ValidationError


class TestDataSourceConfig:
    def test_from_dict_applies_defaults(self) -> None:
        from locus_datasource.sources import DataSourceConfig

        assert DataSourceConfig.from_dict({}).timeout_seconds == 5.0

    def test_from_dict_rejects_unknown_fields(self) -> None:
        from locus_datasource.sources import DataSourceConfig, DataSourceConfigError

        with pytest.raises(DataSourceConfigError, match="Invalid configuration for DataSourceConfig"):
            DataSourceConfig.from_dict({"timeout": 3})

    @pytest.mark.parametrize("timeout", [0, -1.5])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        from locus_datasource.sources import DataSourceConfig, DataSourceConfigError

        with pytest.raises(DataSourceConfigError):
            DataSourceConfig.from_dict({"timeout_seconds": timeout})

    def test_from_dict_rejects_non_dict(self) -> None:
        from locus_datasource.sources import DataSourceConfig, DataSourceConfigError

        with pytest.raises(DataSourceConfigError, match="config must be a dict, got list"):
            DataSourceConfig.from_dict([])  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        from locus_datasource.sources import DataSourceConfig

        config = DataSourceConfig.from_dict({})

        with pytest.raises(ValidationError):
            config.timeout_seconds = 1.0  # type: ignore[misc]

    def test_subclass_inherits_strictness(self) -> None:
        from locus_datasource.sources import DataSourceConfig, DataSourceConfigError

        class WikiConfig(DataSourceConfig):
            space: str

        assert WikiConfig.from_dict({"space": "eng"}).space == "eng"
        with pytest.raises(DataSourceConfigError, match="WikiConfig"):
            WikiConfig.from_dict({"space": "eng", "spaces": ["ops"]})


class TestHTTPSourceConfig:
    def test_minimal(self) -> None:
        from locus_datasource.sources import HTTPSourceConfig

        config = HTTPSourceConfig.from_dict({"base_url": "https://api.example.com"})

        assert config.health_path == "/"
        assert config.headers == {}
        assert config.require_reachable is False

    def test_base_url_stripped(self) -> None:
        from locus_datasource.sources import HTTPSourceConfig

        assert HTTPSourceConfig.from_dict({"base_url": "  http://localhost:8080  "}).base_url == "http://localhost:8080"

    @pytest.mark.parametrize("base_url", ["", "   ", "localhost:8080", "ftp://files.example.com"])
    def test_invalid_base_url(self, base_url: str) -> None:
        from locus_datasource.sources import DataSourceConfigError, HTTPSourceConfig

        with pytest.raises(DataSourceConfigError, match="base_url"):
            HTTPSourceConfig.from_dict({"base_url": base_url})

    def test_base_url_required(self) -> None:
        from locus_datasource.sources import DataSourceConfigError, HTTPSourceConfig

        with pytest.raises(DataSourceConfigError):
            HTTPSourceConfig.from_dict({})

    def test_health_path_must_be_absolute(self) -> None:
        from locus_datasource.sources import DataSourceConfigError, HTTPSourceConfig

        with pytest.raises(DataSourceConfigError, match="health_path"):
            HTTPSourceConfig.from_dict({"base_url": "https://api.example.com", "health_path": "healthz"})
