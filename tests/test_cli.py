"""Test the command-line interface."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

import ptxtest
from ptxscan.__main__ import main


SRC = Path(__file__).parent.parent / "src"


@pytest.fixture
def example(tmp_path):
    path = tmp_path / "example.ptx"
    path.write_text(ptxtest.EXAMPLE, encoding="utf-8")
    return path


def test_cli_module(example):
    """Run the module as a script."""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    result = subprocess.run(
        [sys.executable, "-m", "ptxscan", str(example)],
        capture_output=True,
        text=True,
        env=env,
    )
    assert result.returncode == 0, f"CLI failed: {result.stderr}"
    assert ".version 8.0 .target sm_80 .address_size 64" in result.stdout
    assert ".entry visible _Z6kernelPiS_i" in result.stdout


def test_listing(example, capsys):
    assert main([str(example)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == ".version 8.0 .target sm_80 .address_size 64"
    assert lines[1].endswith(".func _foo (declaration)")
    assert lines[2] == "    returns (.param .b64 func_retval0)"
    assert lines[3].endswith(".global .b8 scratch[16]")
    assert lines[4].endswith(".entry visible _Z6kernelPiS_i")


def test_params(example, capsys):
    assert main([str(example), "--params"]) == 0
    out = capsys.readouterr().out
    assert "    .u32       4  _Z6kernelPiS_i_param_1" in out


def test_body(example, capsys):
    assert main([str(example), "--body"]) == 0
    out = capsys.readouterr().out
    assert "ld.param.u64" in out


def test_preamble_text(capsys):
    assert main([".version 7.0\n.target sm_50", "--text", "--preamble"]) == 0
    assert capsys.readouterr().out.strip() == ".version 7.0 .target sm_50"


def test_lark(example, capsys):
    assert main([str(example), "--lark"]) == 0
    out = capsys.readouterr().out
    assert "preamble" in out
    assert "global scratch" in out
    assert "TYPE: '.b8'" in out


def test_rich(example, capsys):
    assert main([str(example), "--rich"]) == 0
    out = capsys.readouterr().out
    assert "_Z6kernelPiS_i" in out
    assert "scratch" in out


def test_rich_and_lark(example):
    with pytest.raises(SystemExit):
        main([str(example), "--rich", "--lark"])


def test_syntax_error(capsys):
    source = ".version 7.0\n.target sm_50\n.func f\n.func g;\n"
    assert main([source, "--text"]) == 1
    err = capsys.readouterr().err
    assert err.startswith("<text>:4:1: Expected ';' or function body")
    assert "  | .func g;" in err


def test_decode_error(capsys):
    source = ".version 7.0\n.target sm_50\n.func f(\n.param .pred p\n);\n"
    assert main([source, "--text"]) == 1
    assert "<text>:4:8: Unknown type: .pred" in capsys.readouterr().err
