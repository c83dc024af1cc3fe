import pytest

from deployment.constants import ARTIFACTS_DIR
from deployment.utils import get_artifact_filepath, validate_config


def _config(chain_id=1337, modules=None):
    return {
        "deployment": {"name": "vivid-nft", "chain_id": chain_id},
        "artifacts": {"dir": "./deployment/artifacts/", "filename": "local.json"},
        "modules": modules or {"VividNFTModule": {"symbol": "VIVID"}},
    }


@pytest.fixture
def live_network(monkeypatch):
    monkeypatch.setattr("deployment.utils.is_local_network", lambda: False)


@pytest.fixture
def local_network(monkeypatch):
    monkeypatch.setattr("deployment.utils.is_local_network", lambda: True)


def test_artifact_filepath():
    config = _config()
    assert str(get_artifact_filepath(config)).endswith("deployment/artifacts/local.json")

    del config["artifacts"]["dir"]
    assert get_artifact_filepath(config) == ARTIFACTS_DIR / "local.json"

    del config["artifacts"]
    with pytest.raises(ValueError, match="artifact filename"):
        get_artifact_filepath(config)


def test_validate_config(live_network):
    filepath = validate_config(_config(chain_id=11155111), chain_id=11155111)
    assert filepath.name == "local.json"


def test_chain_mismatch_on_live_network(live_network):
    with pytest.raises(ValueError, match="does not match"):
        validate_config(_config(chain_id=1), chain_id=11155111)


def test_chain_mismatch_on_local_network(local_network):
    assert validate_config(_config(chain_id=11155111), chain_id=1337).name == "local.json"


@pytest.mark.parametrize(
    "config,message",
    [
        ({}, "deployment is not set"),
        ({"deployment": {"name": "vivid-nft"}}, "chain_id is not set"),
        ({"deployment": {"chain_id": 1337}, "modules": ["VividNFTModule"]}, "mapping"),
    ],
)
def test_invalid_config(local_network, config, message):
    with pytest.raises(ValueError, match=message):
        validate_config(config, chain_id=1337)
