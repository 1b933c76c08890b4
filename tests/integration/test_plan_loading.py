"""Integration tests for loading plans from files and URLs."""

import json
from pathlib import Path

import pytest
import requests
import responses

from contract_sequencer import PlanNotFoundError, PlanValidationError, Reference, load_plan

PLAN_URL = "https://plans.example.com/azbit.json"


class TestLoadPlanFromFile:
    """Test loading plans from local files."""

    def test_loads_azbit_plan(self, azbit_plan_path: Path):
        plan = load_plan(azbit_plan_path)

        assert plan.name == "azbit"
        assert plan.step_ids() == ["AzbitToken", "AzbitBounty", "AzbitAirdrop"]
        assert plan.steps[2].args == (Reference("AzbitToken"),)

    def test_accepts_string_path(self, azbit_plan_path: Path):
        plan = load_plan(str(azbit_plan_path))
        assert len(plan) == 3

    def test_missing_file_raises_plan_not_found(self, tmp_path: Path):
        with pytest.raises(PlanNotFoundError) as exc_info:
            load_plan(tmp_path / "missing.json")

        assert "missing.json" in str(exc_info.value)

    def test_missing_file_catchable_as_file_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_plan(tmp_path / "missing.json")

    def test_default_path_in_working_directory(
        self, tmp_path: Path, azbit_plan_json, monkeypatch
    ):
        (tmp_path / "deployment-plan.json").write_text(json.dumps(azbit_plan_json))
        monkeypatch.chdir(tmp_path)

        plan = load_plan()

        assert plan.name == "azbit"

    def test_default_path_from_environment(self, azbit_plan_path: Path, monkeypatch):
        monkeypatch.setenv("CONTRACT_SEQUENCER_PLAN", str(azbit_plan_path))

        assert load_plan().name == "azbit"

    def test_malformed_plan_rejected(self, tmp_path: Path):
        plan_file = tmp_path / "plan.json"
        plan_file.write_text(json.dumps({"steps": [{"args": [1]}]}))

        with pytest.raises(PlanValidationError):
            load_plan(plan_file)

    def test_invalid_json_raises_plan_validation_error(self, tmp_path: Path):
        plan_file = tmp_path / "plan.json"
        plan_file.write_text("{not json")

        with pytest.raises(PlanValidationError) as exc_info:
            load_plan(plan_file)

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)
        assert "plan.json" in str(exc_info.value)

    def test_plan_with_funding_and_networks(self, tmp_path: Path):
        plan_file = tmp_path / "plan.json"
        plan_file.write_text(
            json.dumps(
                {
                    "steps": [
                        {"contract": "AzbitToken", "args": [1000000000, "Azbit Token", "AZ"]},
                        {
                            "contract": "AzbitAirdrop",
                            "args": [{"$ref": "AzbitToken"}],
                            "value": "0.5 ether",
                            "networks": ["development"],
                        },
                    ]
                }
            )
        )

        plan = load_plan(plan_file)

        assert plan.name is None
        assert plan.steps[1].value == 5 * 10**17
        assert plan.steps[1].networks == ("development",)


class TestLoadPlanFromUrl:
    """Test loading plans over HTTP."""

    @responses.activate
    def test_fetches_plan(self, azbit_plan_json):
        responses.add(responses.GET, PLAN_URL, json=azbit_plan_json, status=200)

        plan = load_plan(PLAN_URL)

        assert plan.step_ids() == ["AzbitToken", "AzbitBounty", "AzbitAirdrop"]
        assert len(responses.calls) == 1

    @responses.activate
    def test_http_error_raises_runtime_error(self):
        responses.add(responses.GET, PLAN_URL, status=404)

        with pytest.raises(RuntimeError) as exc_info:
            load_plan(PLAN_URL)

        assert "404" in str(exc_info.value)

    @responses.activate
    def test_network_error_raises_runtime_error(self):
        responses.add(
            responses.GET, PLAN_URL, body=requests.ConnectionError("connection refused")
        )

        with pytest.raises(RuntimeError) as exc_info:
            load_plan(PLAN_URL)

        assert isinstance(exc_info.value.__cause__, requests.RequestException)

    @responses.activate
    def test_remote_plan_validated_structurally(self):
        responses.add(responses.GET, PLAN_URL, json={"name": "no steps"}, status=200)

        with pytest.raises(PlanValidationError):
            load_plan(PLAN_URL)

    @responses.activate
    def test_non_json_body_raises_plan_validation_error(self):
        """A body that is not JSON is a bad plan, not a transport failure."""
        responses.add(
            responses.GET,
            PLAN_URL,
            body="<html>Not Found</html>",
            status=200,
            content_type="text/html",
        )

        with pytest.raises(PlanValidationError) as exc_info:
            load_plan(PLAN_URL)

        assert PLAN_URL in str(exc_info.value)
