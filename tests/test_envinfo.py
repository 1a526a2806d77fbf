import os
import sys

import pytest

from lxstd import envinfo


def test_get_set_and_unset(monkeypatch):
    monkeypatch.setenv("LXSTD_TEST_VAR", "value")
    assert envinfo.get("LXSTD_TEST_VAR") == "value"
    monkeypatch.delenv("LXSTD_TEST_VAR")
    assert envinfo.get("LXSTD_TEST_VAR") is None


def test_get_requires_str():
    with pytest.raises(TypeError):
        envinfo.get(1)


def test_variables_contains_set_var(monkeypatch):
    monkeypatch.setenv("LXSTD_OTHER", "abc")
    assert envinfo.variables()["LXSTD_OTHER"] == "abc"


def test_variables_is_a_copy(monkeypatch):
    snapshot = envinfo.variables()
    snapshot["LXSTD_NOT_SET"] = "x"
    assert "LXSTD_NOT_SET" not in os.environ
    assert "LXSTD_NOT_SET" not in envinfo.variables()


def test_args_match_argv():
    assert envinfo.args() == sys.argv


def test_cwd_follows_chdir(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert os.path.realpath(envinfo.cwd()) == os.path.realpath(tmp_path)


def test_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert envinfo.home() == str(tmp_path)
    monkeypatch.delenv("HOME")
    assert envinfo.home() is None