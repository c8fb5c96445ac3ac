"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация сериализованных Pydantic моделей
- Детекция нарушений required полей, типов и constraints
- Загрузка LaunchpadConfig из JSON файла
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    BundleTrackerValidator,
    LaunchpadConfigValidator,
    ProjectStateValidator,
    SchemaLoader,
    WalletRelationshipValidator,
    validate_bundle_tracker,
    validate_launchpad_config,
    validate_project_state,
    validate_wallet_relationship,
)
from src.core.domain import (
    BundleTracker,
    CurveConfig,
    IntegrationMethod,
    LaunchpadConfig,
    ProjectState,
    WalletRelationship,
    load_launchpad_config,
)


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_launchpad_config():
    """Валидный launchpad_config."""
    return {
        "authority": "Admin",
        "fee_recipient": "Treasury",
        "trading_fee_bps": 100,
        "bundle_threshold_bps": 5000,
        "graduation_market_cap": 69_000_000,
        "relationship_threshold": 5000,
        "external_transfer_fee_bps": 200,
        "integration_method": "discrete",
    }


@pytest.fixture
def valid_project_state():
    """Валидный project_state (через модель)."""
    project = ProjectState.launch(
        mint="MintA",
        creator="Creator",
        name="Alpha",
        symbol="ALP",
        curve=CurveConfig.from_rate(10100, 1000),
    )
    return project.model_dump(mode="json")


# =============================================================================
# ТЕСТЫ: SCHEMA LOADER
# =============================================================================


@pytest.mark.parametrize(
    "schema_name",
    ["launchpad_config", "project_state", "bundle_tracker", "wallet_relationship"],
)
def test_schemas_load_and_pass_meta_validation(schema_name):
    schema = SchemaLoader().load_schema(schema_name)
    assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"


def test_schema_loader_caches():
    loader = SchemaLoader()
    assert loader.load_schema("project_state") is loader.load_schema("project_state")


def test_missing_schema():
    with pytest.raises(FileNotFoundError):
        SchemaLoader().load_schema("does_not_exist")


def test_missing_schema_dir(tmp_path):
    with pytest.raises(RuntimeError):
        SchemaLoader(tmp_path / "nowhere")


# =============================================================================
# ТЕСТЫ: LAUNCHPAD CONFIG
# =============================================================================


def test_launchpad_config_valid(valid_launchpad_config):
    validate_launchpad_config(valid_launchpad_config)


def test_launchpad_config_model_dump_valid():
    config = LaunchpadConfig(
        authority="Admin",
        fee_recipient="Treasury",
        bundle_threshold_bps=2000,
        graduation_market_cap=1,
    )
    validate_launchpad_config(config.model_dump(mode="json"))


def test_launchpad_config_missing_required(valid_launchpad_config):
    del valid_launchpad_config["authority"]
    with pytest.raises(ValidationError, match="authority"):
        validate_launchpad_config(valid_launchpad_config)


def test_launchpad_config_fee_out_of_range(valid_launchpad_config):
    valid_launchpad_config["trading_fee_bps"] = 10_001
    assert not LaunchpadConfigValidator().is_valid(valid_launchpad_config)


def test_launchpad_config_unknown_method(valid_launchpad_config):
    valid_launchpad_config["integration_method"] = "trapezoid"
    with pytest.raises(ValidationError):
        validate_launchpad_config(valid_launchpad_config)


def test_launchpad_config_extra_field(valid_launchpad_config):
    valid_launchpad_config["unexpected"] = 1
    with pytest.raises(ValidationError):
        validate_launchpad_config(valid_launchpad_config)


# =============================================================================
# ТЕСТЫ: PROJECT STATE
# =============================================================================


def test_project_state_valid(valid_project_state):
    validate_project_state(valid_project_state)


def test_project_state_negative_supply(valid_project_state):
    valid_project_state["supply"] = -1
    errors = list(ProjectStateValidator().iter_errors(valid_project_state))
    assert len(errors) == 1


def test_project_state_describe_errors(valid_project_state):
    valid_project_state["supply"] = -1
    valid_project_state["curve"]["curve_params"] = [10100, -5]

    messages = ProjectStateValidator().describe_errors(valid_project_state)

    assert len(messages) == 2
    assert messages[0].startswith("curve.curve_params.1:")
    assert messages[1].startswith("supply:")


def test_project_state_supply_above_u64(valid_project_state):
    valid_project_state["reserve_balance"] = 2**64
    with pytest.raises(ValidationError):
        validate_project_state(valid_project_state)


def test_project_state_symbol_too_long(valid_project_state):
    valid_project_state["symbol"] = "S" * 17
    with pytest.raises(ValidationError):
        validate_project_state(valid_project_state)


def test_project_state_curve_params_types(valid_project_state):
    valid_project_state["curve"]["curve_params"] = [10100, "1000"]
    with pytest.raises(ValidationError):
        validate_project_state(valid_project_state)


# =============================================================================
# ТЕСТЫ: BUNDLE TRACKER / WALLET RELATIONSHIP
# =============================================================================


def test_bundle_tracker_valid():
    tracker = BundleTracker(
        mint="MintA",
        wallet="w1",
        related_wallets=frozenset({"w2", "w3"}),
        total_bundle_balance=250_000,
        is_bundling=True,
        last_updated=10,
    )
    validate_bundle_tracker(tracker.model_dump(mode="json"))


def test_bundle_tracker_duplicate_wallets():
    data = BundleTracker(mint="MintA", wallet="w1").model_dump(mode="json")
    data["related_wallets"] = ["w2", "w2"]
    assert not BundleTrackerValidator().is_valid(data)


def test_wallet_relationship_valid():
    rel = WalletRelationship(
        mint="MintA", wallet_a="w1", wallet_b="w2", strength=65535, last_interaction_time=0
    )
    validate_wallet_relationship(rel.model_dump(mode="json"))


def test_wallet_relationship_zero_count():
    data = {
        "mint": "MintA",
        "wallet_a": "w1",
        "wallet_b": "w2",
        "strength": 10,
        "last_interaction_time": 0,
        "interaction_count": 0,
    }
    assert not WalletRelationshipValidator().is_valid(data)


# =============================================================================
# ТЕСТЫ: load_launchpad_config
# =============================================================================


def test_load_launchpad_config(tmp_path, valid_launchpad_config):
    valid_launchpad_config["integration_method"] = "average_price"
    path = tmp_path / "launchpad.json"
    path.write_text(json.dumps(valid_launchpad_config), encoding="utf-8")

    config = load_launchpad_config(path)

    assert config.authority == "Admin"
    assert config.graduation_market_cap == 69_000_000
    assert config.integration_method == IntegrationMethod.AVERAGE_PRICE


def test_load_launchpad_config_contract_violation(tmp_path, valid_launchpad_config):
    valid_launchpad_config["bundle_threshold_bps"] = -5
    path = tmp_path / "launchpad.json"
    path.write_text(json.dumps(valid_launchpad_config), encoding="utf-8")

    with pytest.raises(ValidationError):
        load_launchpad_config(path)


def test_load_launchpad_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_launchpad_config(tmp_path / "missing.json")
