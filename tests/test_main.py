import pytest

from boundarylesson.main import main, parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.seed is None
    assert args.config is None
    assert not args.debug
    assert args.log_file is None


def test_parse_args_options():
    args = parse_args(["--seed", "42", "--config", "lesson.json", "--debug", "--log-file", "out.log"])
    assert args.seed == 42
    assert args.config == "lesson.json"
    assert args.debug
    assert args.log_file == "out.log"


def test_invalid_config_exits_with_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(path)])
    assert excinfo.value.code == 1


def test_missing_config_exits_with_error(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "missing.json")])
    assert excinfo.value.code == 1


def test_failed_config_is_logged(tmp_path):
    path = tmp_path / "bad_stage.json"
    path.write_text('{"stages": {"sharp": {"count": -1}}}', encoding="utf-8")
    log_file = tmp_path / "lesson.log"
    with pytest.raises(SystemExit):
        main(["--config", str(path), "--log-file", str(log_file)])
    assert "Could not load lesson config" in log_file.read_text(encoding="utf-8")
