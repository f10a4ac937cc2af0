"""Tests for the command-line interface."""

import json
import pytest
from click.testing import CliRunner
from snapshot_binding.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def person_file(temp_dir, person_node):
    path = temp_dir / "p1.json"
    path.write_text(json.dumps(person_node), encoding='utf-8')
    return path


class TestCli:
    """Tests for the snapshot-binding commands."""

    def test_check_success(self, runner, person_file):
        result = runner.invoke(main, ["check", str(person_file), "sample_models:Person"])

        assert result.exit_code == 0
        assert "Bound 1 Person object(s)" in result.output

    def test_check_failure(self, runner, person_file):
        result = runner.invoke(main, ["check", str(person_file), "sample_models:NameOnly"])

        assert result.exit_code == 1
        assert "failed at key" in result.output
        assert "no binding found for key" in result.output

    def test_check_list(self, runner, temp_dir, people_tree):
        path = temp_dir / "people.json"
        path.write_text(json.dumps(people_tree), encoding='utf-8')

        result = runner.invoke(main, ["check", str(path), "sample_models:Person", "--list"])

        assert result.exit_code == 0
        assert "Bound 3 Person object(s)" in result.output

    def test_check_bad_target(self, runner, person_file):
        result = runner.invoke(main, ["check", str(person_file), "sample_models"])

        assert result.exit_code != 0
        assert "expected 'module:Class'" in result.output

    def test_check_non_bindable_target(self, runner, person_file):
        result = runner.invoke(main, ["check", str(person_file), "sample_models:Color"])

        assert result.exit_code != 0
        assert "not a BindableSnapshot subclass" in result.output

    def test_roundtrip_stdout(self, runner, person_file, person_node):
        result = runner.invoke(main, ["roundtrip", str(person_file), "sample_models:Person"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"id": "p1", **person_node}

    def test_roundtrip_with_key_and_output(self, runner, person_file, temp_dir):
        output = temp_dir / "out.json"
        result = runner.invoke(main, ["roundtrip", str(person_file), "sample_models:Person",
                                      "--key", "K7", "--identity-field", "uid",
                                      "-o", str(output)])

        assert result.exit_code == 0
        assert json.loads(output.read_text(encoding='utf-8'))["uid"] == "K7"

    def test_roundtrip_failure(self, runner, person_file):
        result = runner.invoke(main, ["roundtrip", str(person_file), "sample_models:NameOnly"])

        assert result.exit_code == 1
        assert "Binding failed at key 'isFancy'" in result.output

    def test_describe(self, runner):
        result = runner.invoke(main, ["describe", "sample_models:Group"])

        assert result.exit_code == 0
        lines = result.output.splitlines()
        assert lines[0] == "id: field (attribute=id)"
        assert lines[2] == "address: object (attribute=address, targetType=Address)"
