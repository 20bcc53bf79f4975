from geomatrix.globals import logutil


def test_warn_goes_to_stderr(capsys):
    logutil.warn("careful")
    captured = capsys.readouterr()
    assert "[WARNING]" in captured.err
    assert "careful" in captured.err
    assert captured.out == ""


def test_debug_respects_verbose(capsys):
    logutil.set_verbose(False)
    logutil.debug("hidden")
    assert capsys.readouterr().out == ""

    logutil.set_verbose(True)
    try:
        logutil.debug("shown")
    finally:
        logutil.set_verbose(False)
    assert "shown" in capsys.readouterr().out


def test_logger_tees_to_file(tmp_path):
    path = tmp_path / "logs" / "run.log"
    with logutil.Logger(path):
        logutil.info("hello log")
    text = path.read_text(encoding="utf-8")
    assert "[INFO] hello log" in text
    assert "\x1b[" not in text
    assert text.startswith("[")


def test_logger_keeps_streams_apart(tmp_path, capsys):
    path = tmp_path / "run.log"
    with logutil.Logger(path):
        logutil.info("to stdout")
        logutil.warn("to stderr")
    captured = capsys.readouterr()
    assert "to stdout" in captured.out
    assert "to stderr" not in captured.out
    assert "to stderr" in captured.err

    text = path.read_text(encoding="utf-8")
    assert "[INFO] to stdout" in text
    assert "[WARNING] to stderr" in text


def test_setup_reuses_active_logger(tmp_path):
    first = logutil.Logger.setup(tmp_path / "a.log")
    try:
        assert logutil.Logger.setup(tmp_path / "b.log") is first
    finally:
        logutil.Logger.teardown()
    assert logutil.Logger._instance is None
