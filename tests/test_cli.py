from pathlib import Path

from siteassets.cli import main
from siteassets.run_service import EXIT_INVALID_CONFIG, EXIT_PARTIAL_FAILURES, EXIT_SUCCESS


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _write_config(site_root: Path, output: Path, extra: str = "") -> Path:
    config_file = site_root / "site.yaml"
    config_file.write_text(
        f"destinationFolder: {output.as_posix()}\nassetIgnoreHidden: true\n{extra}",
        encoding="utf-8",
    )
    return config_file


def test_copy_command_copies_site(site_root: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "public"
    config_file = _write_config(site_root, output)

    exit_code = main(["copy", "--config", str(config_file)])

    out = capsys.readouterr().out
    assert exit_code == EXIT_SUCCESS
    assert "copied=6" in out
    assert "failed=0" in out
    assert (output / "js" / "bootstrap.min.js").exists()
    assert (output / "blog" / "2013" / "images" / "custom-image.jpg").exists()


def test_copy_command_dry_run_writes_nothing(site_root: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "public"
    config_file = _write_config(site_root, output)

    exit_code = main(["copy", "--config", str(config_file), "--dry-run"])

    assert exit_code == EXIT_SUCCESS
    assert "copied=6" in capsys.readouterr().out
    assert not output.exists()


def test_copy_command_reports_errors(site_root: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "public"
    _write(output / "css", "blocks the css folder")
    config_file = _write_config(site_root, output)

    exit_code = main(["copy", "--config", str(config_file)])

    err = capsys.readouterr().err
    assert exit_code == EXIT_PARTIAL_FAILURES
    assert "bootstrap.min.css" in err


def test_copy_file_command(site_root: Path, tmp_path: Path, capsys) -> None:
    output = tmp_path / "public"
    config_file = _write_config(site_root, output)

    exit_code = main(
        [
            "copy-file",
            "--config",
            str(config_file),
            str(site_root / "assets" / "css" / "bootstrap.min.css"),
            str(site_root / "content" / "blog" / "2012" / "sample.json"),
        ]
    )

    assert exit_code == EXIT_SUCCESS
    assert "copied=2" in capsys.readouterr().out
    assert (output / "css" / "bootstrap.min.css").exists()
    assert (output / "blog" / "2012" / "sample.json").exists()


def test_validate_config_prints_folders(site_root: Path, tmp_path: Path, capsys) -> None:
    config_file = _write_config(site_root, tmp_path / "public")

    exit_code = main(["validate-config", "--config", str(config_file)])

    out = capsys.readouterr().out
    assert exit_code == EXIT_SUCCESS
    assert "assetIgnoreHidden=true" in out
    assert f"assetFolder={site_root / 'assets'}" in out


def test_invalid_config_returns_invalid_config_code(site_root: Path, tmp_path: Path, capsys) -> None:
    config_file = _write_config(site_root, tmp_path / "public", extra="compareBy: sometimes\n")

    exit_code = main(["copy", "--config", str(config_file)])

    assert exit_code == EXIT_INVALID_CONFIG
    assert "Invalid config" in capsys.readouterr().err
