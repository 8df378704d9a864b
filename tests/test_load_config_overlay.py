import os

import pytest

from build_constants.foundation.config_io import find_repo_root, load_config

ENV_VAR = "TEST_BUILD_CONSTANTS_CONFIG"


def _project(tmp_path, base=None, local=None):
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'demo'\n", encoding="utf-8")
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    if base is not None:
        (config_dir / "build_constants.yaml").write_text(base, encoding="utf-8")
    if local is not None:
        (config_dir / "build_constants.local.yaml").write_text(local, encoding="utf-8")
    return tmp_path


def test_load_config_base_only(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path, base="classname: org.example.Constants\nproject:\n  name: demo\n")

    cfg, meta = load_config(env_var=ENV_VAR, start_dir=root)

    assert cfg == {"classname": "org.example.Constants", "project": {"name": "demo"}}
    assert meta["mode"] == "base"
    assert meta["repo_root"] == str(root.resolve())
    assert os.path.basename(meta["paths"][0]) == "build_constants.yaml"


def test_load_config_local_overlay_merges_sections_key_by_key(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(
        tmp_path,
        base=(
            "classname: org.example.Constants\n"
            "project:\n  name: demo\n  version: '1.0'\n"
            "additional_constants:\n  API_LEVEL: 3\n  FLAVOR: prod\n"
            "inputs: [a.txt, b.txt]\n"
        ),
        local=(
            "project:\n  version: '1.1-dev'\n"
            "additional_constants:\n  FLAVOR: dev\n"
            "inputs: [c.txt]\n"
        ),
    )

    cfg, meta = load_config(env_var=ENV_VAR, start_dir=root)

    assert cfg["project"] == {"name": "demo", "version": "1.1-dev"}
    assert cfg["additional_constants"] == {"API_LEVEL": 3, "FLAVOR": "dev"}
    assert cfg["inputs"] == ["c.txt"]
    assert cfg["classname"] == "org.example.Constants"
    assert meta["mode"] == "base+local"
    assert len(meta["paths"]) == 2


def test_load_config_local_overlay_null_clears_a_section(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path, base="additional_constants:\n  A: 1\n", local="additional_constants: null\n")

    cfg, _meta = load_config(env_var=ENV_VAR, start_dir=root)

    assert cfg["additional_constants"] is None


def test_load_config_overlay_type_mismatch_raises(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path, base="project:\n  name: demo\n", local="project: [1, 2]\n")

    with pytest.raises(ValueError, match=r"Invalid config overlay for project"):
        load_config(env_var=ENV_VAR, start_dir=root)


def test_load_config_invalid_yaml_names_the_file(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path, base="a: 1\n", local="a: [1, 2\n")

    with pytest.raises(ValueError) as excinfo:
        load_config(env_var=ENV_VAR, start_dir=root)

    assert "build_constants.local.yaml" in str(excinfo.value)


def test_load_config_rejects_non_mapping(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path, base="- a\n- b\n")

    with pytest.raises(ValueError, match=r"must contain a YAML mapping"):
        load_config(env_var=ENV_VAR, start_dir=root)


def test_load_config_env_override_loads_single_file(tmp_path, monkeypatch):
    repo = tmp_path / "repo"
    repo.mkdir()
    root = _project(repo, base="a: 1\n", local="a: 2\n")
    env_path = tmp_path / "my_config.yaml"
    env_path.write_text("a: 999\n", encoding="utf-8")

    monkeypatch.setenv(ENV_VAR, str(env_path))
    cfg, meta = load_config(env_var=ENV_VAR, start_dir=root)

    assert cfg == {"a": 999}
    assert meta["mode"] == "env"
    assert meta["paths"] == [os.path.abspath(str(env_path))]
    assert meta["repo_root"] is None


def test_load_config_explicit_path_wins_over_env(tmp_path, monkeypatch):
    env_path = tmp_path / "env.yaml"
    env_path.write_text("a: 1\n", encoding="utf-8")
    explicit_path = tmp_path / "explicit.yaml"
    explicit_path.write_text("a: 2\n", encoding="utf-8")
    monkeypatch.setenv(ENV_VAR, str(env_path))

    cfg, meta = load_config(config_path=str(explicit_path), env_var=ENV_VAR)

    assert cfg == {"a": 2}
    assert meta["mode"] == "explicit"
    assert meta["repo_root"] is None


def test_load_config_missing_base_raises(tmp_path, monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)
    root = _project(tmp_path)

    with pytest.raises(FileNotFoundError, match=r"Missing base config file"):
        load_config(env_var=ENV_VAR, start_dir=root)


def test_find_repo_root_walks_up_to_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text("[project]\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_repo_root(nested) == str(tmp_path.resolve())


def test_find_repo_root_accepts_a_file_path(tmp_path):
    (tmp_path / ".git").mkdir()
    source = tmp_path / "src" / "main.py"
    source.parent.mkdir()
    source.write_text("", encoding="utf-8")

    assert find_repo_root(source) == str(tmp_path.resolve())
