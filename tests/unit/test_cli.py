"""
CLI Unit Tests
Tests for arbor_cli/main.py and the command modules.

Commands are driven through main(argv) with output captured by capsys.
"""
import json

import pytest

from arbor_cli.commands.build import read_elements
from arbor_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    main,
)
from core.crypto.hashing import to_hex
from core.merkle.merkle_proofs import get_proof
from core.merkle.merkle_tree import build_merkle_tree
from core.merkle.proof_format import encode_proof

from fixtures.common import leaf, node


DEMO = ["John", "Lily", "Roy", "Suzie", "Jane", "kane"]


class TestReadElements:
    """Tests for read_elements()."""

    def test_positional_only(self):
        assert read_elements(["a", "b"]) == ["a", "b"]

    def test_file_appended_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "elements.txt"
        path.write_text("c\n\nd\n", encoding="utf-8")

        assert read_elements(["a"], str(path)) == ["a", "c", "d"]


class TestBuildCommand:
    """Tests for `arbor build`."""

    def test_human_output(self, clean_env, capsys):
        assert main(["build", "a", "b", "c"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "0 a" in out
        assert f"root: {to_hex(node(node(leaf('a'), leaf('b')), node(leaf('c'), leaf('c'))))}" in out
        assert "depth: 3" in out

    def test_json_output(self, clean_env, capsys):
        assert main(["build", "a", "b", "--json", "--nodes"]) == EXIT_SUCCESS

        summary = json.loads(capsys.readouterr().out)
        assert summary["element_count"] == 2
        assert summary["node_count"] == 3
        assert summary["root"] == to_hex(node(leaf("a"), leaf("b")))
        assert summary["nodes"][2]["left"] == 0

    def test_nodes_omitted_by_default(self, clean_env, capsys):
        main(["build", "a", "--json"])

        assert "nodes" not in json.loads(capsys.readouterr().out)

    def test_empty_input_fails(self, clean_env, capsys):
        assert main(["build"]) == EXIT_RUNTIME_ERROR
        assert "empty" in capsys.readouterr().err

    def test_missing_file_fails(self, clean_env, capsys):
        assert main(["build", "--file", "missing.txt"]) == EXIT_RUNTIME_ERROR

    def test_config_format_json(self, clean_env, capsys, monkeypatch):
        monkeypatch.setenv("ARBOR_OUTPUT_FORMAT", "json")

        assert main(["build", "a"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["element_count"] == 1


class TestProveCommand:
    """Tests for `arbor prove`."""

    def test_json_output(self, clean_env, capsys):
        assert main(["prove", "2", "a", "b", "c", "--json"]) == EXIT_SUCCESS

        envelope = json.loads(capsys.readouterr().out)
        assert envelope["index"] == 2
        assert envelope["siblings"] == [to_hex(leaf("c")), to_hex(node(leaf("a"), leaf("b")))]

    def test_human_output(self, clean_env, capsys):
        assert main(["prove", "0", "a", "b"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert f"0 {to_hex(leaf('b'))}" in out

    def test_out_of_range(self, clean_env, capsys):
        assert main(["prove", "3", "a", "b", "c"]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err

    def test_writes_files(self, clean_env, capsys):
        assert main(["prove", "1", "a", "b", "c", "--out", "p.json", "--binary-out", "p.bin"]) == EXIT_SUCCESS

        tree = build_merkle_tree(["a", "b", "c"])
        assert (clean_env / "p.bin").read_bytes() == encode_proof(get_proof(tree, 1))
        assert json.loads((clean_env / "p.json").read_text())["root"] == to_hex(tree.root_digest)


class TestVerifyCommand:
    """Tests for `arbor verify`."""

    def test_envelope_round_trip(self, clean_env, capsys):
        main(["prove", "4", *DEMO, "--out", "proof.json"])
        capsys.readouterr()

        assert main(["verify", "--proof", "proof.json", "--element", "Jane"]) == EXIT_SUCCESS
        assert "valid: true" in capsys.readouterr().out

    def test_envelope_wrong_element(self, clean_env, capsys):
        main(["prove", "4", *DEMO, "--out", "proof.json"])

        assert main(["verify", "--proof", "proof.json", "--element", "kane"]) == EXIT_VERIFICATION_FAILED

    def test_envelope_malformed(self, clean_env, capsys):
        (clean_env / "proof.json").write_text('{"index": 0}')

        assert main(["verify", "--proof", "proof.json"]) == EXIT_RUNTIME_ERROR
        assert "invalid proof envelope" in capsys.readouterr().err

    def test_components(self, clean_env, capsys):
        tree = build_merkle_tree(["a", "b", "c"])
        siblings = [to_hex(s) for s in get_proof(tree, 2)]
        argv = ["verify", "--root", to_hex(tree.root_digest), "--index", "2", "--element", "c"]
        for sibling in siblings:
            argv += ["--sibling", sibling]

        assert main(argv + ["--json"]) == EXIT_SUCCESS
        report = json.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert report["proof_length"] == 2

    def test_components_wrong_index(self, clean_env, capsys):
        tree = build_merkle_tree(["a", "b", "c"])
        argv = ["verify", "--root", to_hex(tree.root_digest), "--index", "1", "--element", "c"]
        for sibling in get_proof(tree, 2):
            argv += ["--sibling", to_hex(sibling)]

        assert main(argv) == EXIT_VERIFICATION_FAILED

    def test_binary_proof(self, clean_env, capsys):
        tree = build_merkle_tree(DEMO)
        (clean_env / "proof.bin").write_bytes(encode_proof(get_proof(tree, 5)))
        argv = [
            "verify", "--root", to_hex(tree.root_digest),
            "--index", "5", "--element", "kane", "--binary-proof", "proof.bin",
        ]

        assert main(argv) == EXIT_SUCCESS

    @pytest.mark.parametrize(
        "extra,flag",
        [
            (["--index", "0"], "--index"),
            (["--root", "0x" + "00" * 32], "--root"),
            (["--sibling", "0x" + "00" * 32], "--sibling"),
            (["--binary-proof", "proof.bin"], "--binary-proof"),
        ],
    )
    def test_envelope_with_component_flags_rejected(self, clean_env, capsys, extra, flag):
        main(["prove", "4", *DEMO, "--out", "proof.json"])
        capsys.readouterr()

        assert main(["verify", "--proof", "proof.json", "--element", "Jane", *extra]) == EXIT_RUNTIME_ERROR
        err = capsys.readouterr().err
        assert "cannot be combined" in err
        assert flag in err

    def test_missing_arguments(self, clean_env, capsys):
        assert main(["verify", "--element", "a"]) == EXIT_RUNTIME_ERROR
        assert "required" in capsys.readouterr().err

    def test_bad_root_hex(self, clean_env, capsys):
        argv = ["verify", "--root", "0x1234", "--index", "0", "--element", "a"]

        assert main(argv) == EXIT_RUNTIME_ERROR


class TestDemoCommand:
    """Tests for `arbor demo`."""

    def test_default_demo(self, clean_env, capsys):
        assert main(["demo"]) == EXIT_SUCCESS

        out = capsys.readouterr().out
        assert "2 Roy" in out
        assert "proof for index 2 (Roy):" in out
        assert "valid: true" in out

    def test_demo_every_index(self, clean_env, capsys):
        for index in range(len(DEMO)):
            assert main(["demo", "--index", str(index)]) == EXIT_SUCCESS

    def test_demo_bad_index(self, clean_env, capsys):
        assert main(["demo", "--index", "6"]) == EXIT_RUNTIME_ERROR
        assert "out of range" in capsys.readouterr().err


class TestConfigCommand:
    """Tests for `arbor config` and config loading errors."""

    def test_init_and_show(self, clean_env, capsys):
        assert main(["config", "--init"]) == EXIT_SUCCESS
        assert (clean_env / "arbor.json").exists()
        assert main(["config", "--init"]) == EXIT_RUNTIME_ERROR

        capsys.readouterr()
        assert main(["config", "--show"]) == EXIT_SUCCESS
        assert json.loads(capsys.readouterr().out)["output"]["format"] == "human"

    def test_bad_config_file(self, clean_env, capsys):
        (clean_env / "arbor.json").write_text('{"output": {"format": "xml"}}')

        assert main(["build", "a"]) == EXIT_RUNTIME_ERROR
        assert "Error loading configuration" in capsys.readouterr().err

    def test_config_file_not_an_object(self, clean_env, capsys):
        (clean_env / "arbor.json").write_text('["logging"]')

        assert main(["build", "a"]) == EXIT_RUNTIME_ERROR
        assert "JSON object" in capsys.readouterr().err

    def test_no_command(self, clean_env, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR
