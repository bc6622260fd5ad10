"""Tests for console output rendering."""
from pathlib import Path

import pytest

from teknify.models import TaskOutcome, UploadConfig, UploadRequest
from teknify.presenter import OutputPresenter


def test_success_goes_to_stdout(capsys):
    OutputPresenter().present(TaskOutcome.ok(Path("a.png"), "a.png: https://u.test/a.png"))

    captured = capsys.readouterr()
    assert captured.out == "a.png: https://u.test/a.png\n"
    assert captured.err == ""


def test_error_goes_to_stderr(capsys):
    OutputPresenter().present(TaskOutcome.transport_error(Path("a.png"), "connection refused"))

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == "Error processing a.png: connection refused\n"


def test_application_error_format(capsys):
    OutputPresenter().present(TaskOutcome.application_error(Path("b.gif"), "unexpected status 500"))

    assert capsys.readouterr().err == "Error processing b.gif: unexpected status 500\n"


def test_json_text_is_written_verbatim(capsys):
    body = '{"result": {"url": "https://u.test/[bold]x[/bold].png", "tags": [1, 2]}, ":smile:": true}'
    OutputPresenter().present(TaskOutcome.ok(Path("x.png"), body))

    assert capsys.readouterr().out == body + "\n"


def test_long_lines_are_not_wrapped(capsys):
    url = "https://u.test/" + "a" * 300 + ".png"
    OutputPresenter().present(TaskOutcome.ok(Path("a.png"), url))

    assert capsys.readouterr().out == url + "\n"


def test_verbose_task_start(capsys):
    OutputPresenter(verbose=True).on_task_start(UploadRequest(Path("a.png"), 0))

    captured = capsys.readouterr()
    assert captured.err == "Uploading a.png\n"
    assert captured.out == ""


def test_quiet_task_start(capsys):
    OutputPresenter(verbose=False).on_task_start(UploadRequest(Path("a.png"), 0))

    assert capsys.readouterr().err == ""


def test_configuration_summary(capsys):
    OutputPresenter(verbose=True).render_configuration_summary(UploadConfig(concurrency=4))
    assert capsys.readouterr().err == "Concurrent uploads: 4\n"

    OutputPresenter(verbose=False).render_configuration_summary(UploadConfig(concurrency=4))
    assert capsys.readouterr().err == ""


def test_batch_summary(capsys):
    outcomes = [
        TaskOutcome.ok(Path("a.png"), "u"),
        TaskOutcome.transport_error(Path("b.png"), "boom"),
        TaskOutcome.ok(Path("c.png"), "u"),
    ]
    OutputPresenter(verbose=True).render_batch_summary(outcomes)

    assert capsys.readouterr().err == "Uploaded 2/3 files (1 failed)\n"


@pytest.mark.parametrize(
    "body",
    [
        '{"a": "x\\ty", "b":\t1}',
        '{"result": {"url": "https://u.test/a.png"}}\r\n',
        '{\n\t"result": {\n\t\t"url": "https://u.test/a.png"\n\t}\n}',
    ],
)
def test_reply_whitespace_is_preserved(capsys, body):
    OutputPresenter().present(TaskOutcome.ok(Path("a.png"), body))

    assert capsys.readouterr().out == body + "\n"


def test_error_with_tab_in_path_is_preserved(capsys):
    OutputPresenter().present(TaskOutcome.transport_error(Path("my\tfile.png"), "boom\r"))

    assert capsys.readouterr().err == "Error processing my\tfile.png: boom\r\n"
