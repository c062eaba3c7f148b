import logging

import pytest
from PIL import Image

from serval_engine.main import main
from serval_engine.utils.logging import LOGGER_NAME

DOCUMENT = "(html (body (div class=box)))"
STYLESHEET = "* { display: block } .box { height: 10px; background: #ff0000 }"


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def files(tmp_path):
    document = tmp_path / "page.txt"
    document.write_text(DOCUMENT)
    stylesheet = tmp_path / "style.css"
    stylesheet.write_text(STYLESHEET)
    config = tmp_path / "config.json"
    return {"html": str(document), "css": str(stylesheet), "config": str(config),
            "dir": tmp_path}


def test_parse_html(files, capsys):
    assert main(["--config", files["config"], "parse-html", files["html"]]) == 0

    assert capsys.readouterr().out.strip() == "(html (body (div class=box)))"


def test_layout(files, capsys):
    assert main(["--config", files["config"], "--viewport-width", "400",
                 "layout", files["html"], files["css"]]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "html(block) (0, 0) [400x10] (padding: 0, border: 0, margin: 0)"
    assert lines[2] == "    div(block) (0, 0) [400x10] (padding: 0, border: 0, margin: 0)"


def test_paint_png(files, capsys):
    output = files["dir"] / "out.png"

    assert main(["--config", files["config"], "paint", files["html"], files["css"],
                 str(output), "--width", "20", "--height", "15"]) == 0

    assert f"saved as: {output}" in capsys.readouterr().out
    with Image.open(output) as image:
        assert image.size == (20, 15)
        assert image.convert("RGB").getpixel((0, 0)) == (255, 0, 0)
        assert image.convert("RGB").getpixel((0, 12)) == (0, 0, 0)


def test_paint_format_from_extension(files):
    output = files["dir"] / "out.html"

    assert main(["--config", files["config"], "paint", files["html"], files["css"],
                 str(output)]) == 0

    assert "ctx.fillRect(0, 0, 800, 10);" in output.read_text(encoding="utf-8")


def test_paint_format_option_wins(files):
    output = files["dir"] / "out.png"

    assert main(["--config", files["config"], "paint", files["html"], files["css"],
                 str(output), "--format", "canvas"]) == 0

    assert output.read_text(encoding="utf-8").startswith("<!doctype html>")


def test_html_syntax_option(files, capsys):
    html = files["dir"] / "page.html"
    html.write_text("<p>hi</p>")

    assert main(["--config", files["config"], "--syntax", "html", "parse-html",
                 str(html)]) == 0

    assert capsys.readouterr().out.strip() == '(html (head) (body (p "hi")))'


def test_parse_error_exits_with_status_1(files, caplog):
    broken = files["dir"] / "broken.txt"
    broken.write_text("(div")

    assert main(["--config", files["config"], "parse-html", str(broken)]) == 1

    assert "Could not parse input" in caplog.text


def test_missing_file_exits_with_status_1(files, caplog):
    missing = str(files["dir"] / "missing.txt")

    assert main(["--config", files["config"], "layout", missing, files["css"]]) == 1

    assert "File error" in caplog.text


def test_non_block_root_propagates(files):
    document = files["dir"] / "inline.txt"
    document.write_text("(span)")
    empty = files["dir"] / "empty.css"
    empty.write_text("")

    with pytest.raises(NotImplementedError):
        main(["--config", files["config"], "layout", str(document), str(empty)])


def test_verbosity_sets_console_level(files):
    main(["--config", files["config"], "-vv", "parse-html", files["html"]])

    logger = logging.getLogger(LOGGER_NAME)
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG


def test_log_file(files):
    log_file = files["dir"] / "logs" / "serval.log"

    main(["--config", files["config"], "--log-file", str(log_file), "layout",
          files["html"], files["css"]])

    assert "RenderEngine" in log_file.read_text(encoding="utf-8")


def test_missing_command_is_a_usage_error(files):
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", files["config"]])

    assert excinfo.value.code == 2
