"""Tests for the e2e client script's configuration."""

import importlib.util
from pathlib import Path

import pytest

E2E_CLIENT = Path(__file__).resolve().parents[3] / "e2e" / "clients" / "safe3-python" / "main.py"


@pytest.fixture
def e2e_client(monkeypatch):
    pytest.importorskip("dotenv")
    monkeypatch.setenv("SAFE3_PROJECT_ID", "test-project")
    monkeypatch.setenv("SAFE3_TRANSPORT_FACTORY", "example.transport:create")
    monkeypatch.setenv("SAFE3_CHAIN_ID", "137")

    spec = importlib.util.spec_from_file_location("safe3_e2e_client", E2E_CLIENT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestE2EClientOptions:
    def test_options_from_environment(self, e2e_client):
        options = e2e_client.build_options()

        assert options.project_id == "test-project"
        assert options.chain_id == 137
        assert options.display_qr is True

    def test_qr_code_goes_to_stderr(self, e2e_client, capsys):
        options = e2e_client.build_options()

        options.qr_renderer("wc:abc@2?relay-protocol=irn")

        out, err = capsys.readouterr()
        assert out == ""
        assert "wc:abc@2?relay-protocol=irn" in err

    def test_transport_factory_path_must_name_callable(self, e2e_client):
        with pytest.raises(ValueError):
            e2e_client.load_transport_factory("example.transport")
