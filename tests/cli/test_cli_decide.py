# tests/cli/test_cli_decide.py
"""
Tests for the `decide`, `inspect` and `version` commands.
"""

import base64
import json

import pytest
from typer.testing import CliRunner

from hybridscaler import __version__
from hybridscaler.cli import app
from hybridscaler.reinforcement import decode_learning_state

runner = CliRunner()


@pytest.fixture
def scaler_file(tmp_path, scaler_document):
    path = tmp_path / "scaler.json"
    path.write_text(json.dumps(scaler_document))
    return path


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_decide_writes_the_updated_resource(scaler_file, tmp_path):
    output = tmp_path / "out" / "scaler.json"

    result = runner.invoke(app, ["decide", "--seed", "42", "--output", str(output), str(scaler_file)])

    assert result.exit_code == 0
    document = json.loads(output.read_text())
    assert document["metadata"] == {"name": "web", "namespace": "shop", "uid": "1234"}
    learning_state = decode_learning_state(base64.b64decode(document["status"]["learningState"]))
    assert learning_state.previous_state.name == "4_0_0_100_100"
    assert document["status"]["replicas"] in (2, 4, 6, 8)


def test_decide_is_repeatable_with_a_seed(scaler_file, tmp_path):
    first, second = tmp_path / "first.json", tmp_path / "second.json"

    runner.invoke(app, ["decide", "--seed", "3", "--output", str(first), str(scaler_file)])
    runner.invoke(app, ["decide", "--seed", "3", "--output", str(second), str(scaler_file)])

    assert first.read_text() == second.read_text()


def test_decide_dry_run_leaves_the_file(scaler_file):
    before = scaler_file.read_text()

    result = runner.invoke(app, ["decide", "--dry-run", str(scaler_file)])

    assert result.exit_code == 0
    assert "Replicas" in result.stdout
    assert scaler_file.read_text() == before


def test_decide_without_learning_keeps_the_workload(scaler_file, scaler_document):
    scaler_document["spec"]["learningType"] = "NONE"
    scaler_file.write_text(json.dumps(scaler_document))

    result = runner.invoke(app, ["decide", str(scaler_file)])

    assert result.exit_code == 0
    document = json.loads(scaler_file.read_text())
    assert document["status"]["replicas"] == 4
    assert document["status"]["containerResources"]["app"]["requests"] == {"cpu": "60m", "memory": "60000000"}
    assert "learningState" not in document["status"]


def test_decide_invalid_state(scaler_file, scaler_document):
    scaler_document["spec"]["resourcePolicy"]["targetUtilization"] = {"cpu": 50}
    scaler_file.write_text(json.dumps(scaler_document))

    result = runner.invoke(app, ["decide", str(scaler_file)])

    assert result.exit_code == 1


def test_decide_invalid_document(tmp_path):
    path = tmp_path / "scaler.json"
    path.write_text("{not json")

    result = runner.invoke(app, ["decide", str(path)])

    assert result.exit_code == 1


def test_inspect_empty_learning_state(scaler_file):
    result = runner.invoke(app, ["inspect", str(scaler_file)])

    assert result.exit_code == 0
    assert "The Q-table is empty." in result.stdout


def test_inspect_after_decide(scaler_file):
    runner.invoke(app, ["decide", "--seed", "1", str(scaler_file)])

    result = runner.invoke(app, ["inspect", str(scaler_file)], env={"COLUMNS": "200"})

    assert result.exit_code == 0
    assert "4_0_0_100_100" in result.stdout


def test_inspect_corrupt_learning_state(scaler_file, scaler_document):
    scaler_document["status"]["learningState"] = base64.b64encode(b"garbage").decode("ascii")
    scaler_file.write_text(json.dumps(scaler_document))

    result = runner.invoke(app, ["inspect", str(scaler_file)])

    assert result.exit_code == 1


def test_decide_builds_the_state_once(scaler_file, mocker):
    from hybridscaler.core import state_builder

    built = mocker.patch("hybridscaler.cli.decide.prepare_state", wraps=state_builder.prepare_state)
    rebuilt = mocker.spy(state_builder, "prepare_state")

    result = runner.invoke(app, ["decide", "--dry-run", str(scaler_file)])

    assert result.exit_code == 0
    assert built.call_count == 1
    assert rebuilt.call_count == 0
