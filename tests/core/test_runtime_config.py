from pathlib import Path

import pytest

from propdraft.core.runtime_config import output_root_dir, runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def _isolate_config_discovery(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


def test_runtime_config_uses_packaged_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    assert output_root_dir() == Path("data") / "output"
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.canvas_size == (800, 550)
    assert cfg.target_fraction == 0.6
    assert cfg.max_scale == 1.2
    assert cfg.annotation_margin == 30.0
    assert cfg.png_scale == 2.0


def test_discovered_config_overrides_only_given_keys(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".propdraft" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text(
        'paths:\n  output_dir: "./out_discovered"\nviewport:\n  max_scale: 2.5\n',
        encoding="utf-8",
    )

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.output_dir == Path("out_discovered")
    assert cfg.max_scale == 2.5
    # 同じセクションの他のキーは既定値のまま
    assert cfg.target_fraction == 0.6


def test_explicit_config_overrides_discovered_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    discovered = tmp_path / ".propdraft" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text('canvas:\n  size: [1024, 768]\n', encoding="utf-8")

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text('canvas:\n  size: [640, 480]\n', encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.canvas_size == (640, 480)


def test_home_config_is_discovered(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    home_cfg = tmp_path / ".config" / "propdraft" / "config.yaml"
    home_cfg.parent.mkdir(parents=True, exist_ok=True)
    home_cfg.write_text("annotation:\n  margin: 45\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == home_cfg
    assert cfg.annotation_margin == 45.0


def test_runtime_config_is_cached_until_path_changes(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    first = runtime_config()
    assert runtime_config() is first

    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("export:\n  png:\n    scale: 4\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config().png_scale == 4.0


def test_missing_explicit_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    set_config_path(tmp_path / "missing.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


def test_unsupported_version_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "v2.yaml"
    explicit.write_text("version: 2\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(RuntimeError):
        runtime_config()


def test_non_positive_values_are_rejected(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "bad.yaml"
    explicit.write_text("export:\n  png:\n    scale: -1\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(ValueError):
        runtime_config()


def test_non_mapping_config_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    _isolate_config_discovery(tmp_path, monkeypatch)

    explicit = tmp_path / "list.yaml"
    explicit.write_text("- 1\n- 2\n", encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(RuntimeError):
        runtime_config()
