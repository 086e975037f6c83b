import httpx
import pytest

from parsemap.client import ParsemapClient
from parsemap.config import ClusteringConfig, Settings, load_settings
from parsemap.exceptions import InvalidInput
from parsemap.session import setup


def test_defaults_without_environment() -> None:
    settings = load_settings({})

    assert settings.base_url == "http://127.0.0.1:8000/v2"
    assert settings.api_key is None
    assert settings.timeout == 10.0
    assert settings.log_level == "INFO"
    assert settings.clustering == ClusteringConfig()
    assert settings.clustering.max_points_per_zone == 200
    assert settings.clustering.low_count_threshold == 4
    assert settings.clustering.suppression_prefix_floor == 5
    assert settings.clustering.max_list_points == 50
    assert settings.clustering.max_covering_prefixes == 64


def test_environment_overrides() -> None:
    settings = load_settings(
        {
            "PARSEMAP_BASE_URL": " http://zones.internal/v2 ",
            "PARSEMAP_API_KEY": " secret ",
            "PARSEMAP_TIMEOUT": "2.5",
            "PARSEMAP_LOG_LEVEL": "debug",
            "PARSEMAP_LOW_COUNT_THRESHOLD": "6",
            "PARSEMAP_PREFIX_FLOOR": "4",
            "PARSEMAP_MAX_LISTED_ZONES": "50",
            "PARSEMAP_MAX_COVERING_PREFIXES": "16",
        }
    )

    assert settings.base_url == "http://zones.internal/v2"
    assert settings.api_key == "secret"
    assert settings.timeout == 2.5
    assert settings.log_level == "DEBUG"
    assert settings.clustering.low_count_threshold == 6
    assert settings.clustering.suppression_prefix_floor == 4
    assert settings.clustering.max_listed_zones == 50
    assert settings.clustering.max_covering_prefixes == 16
    assert settings.clustering.max_points_per_zone == 200


def test_unparsable_values_name_the_variable() -> None:
    with pytest.raises(InvalidInput, match="PARSEMAP_MAX_POINTS_PER_ZONE"):
        load_settings({"PARSEMAP_MAX_POINTS_PER_ZONE": "lots"})


def test_setup_wires_one_client_as_both_sources() -> None:
    settings = Settings(
        base_url="http://zones.test/v2",
        api_key="k",
        clustering=ClusteringConfig(max_listed_zones=10),
    )
    client = ParsemapClient(
        base_url=settings.base_url,
        client=httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))),
    )

    service = setup(settings, client=client)

    assert service.zones is client
    assert service.points is client
    assert service.config.max_listed_zones == 10
    assert service.fetch_list_zones("list-1") == []


def test_setup_builds_a_client_from_settings() -> None:
    service = setup(Settings(base_url="http://zones.test/v2/", api_key="k", timeout=3.0))
    try:
        assert isinstance(service.zones, ParsemapClient)
        assert service.zones.base_url == "http://zones.test/v2"
        assert service.zones.api_key == "k"
    finally:
        service.zones.close()
