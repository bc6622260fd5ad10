"""Tests for reply interpretation."""
from pathlib import Path

import pytest

from teknify.models import OutputMode
from teknify.services.reply import ReplyError, extract_url, interpret


VALID = '{"result":{"url":"http://x/y"}}'


class TestInterpret:
    def test_name_and_url(self):
        reply = interpret(VALID, OutputMode.NAME_AND_URL, Path("pics/cat.png"))
        assert reply.success is True
        assert reply.text == f"{Path('pics/cat.png')}: http://x/y"

    def test_url_only(self):
        reply = interpret(VALID, OutputMode.URL_ONLY, Path("cat.png"))
        assert reply.success is True
        assert reply.text == "http://x/y"

    def test_json_mode_returns_body_unmodified(self):
        body = '{"result": {"url": "http://x/y", "name": "cat.png"}}\n'
        reply = interpret(body, OutputMode.JSON, Path("cat.png"))
        assert reply.text == body

    def test_json_mode_does_not_validate(self):
        reply = interpret("{not json", OutputMode.JSON, Path("cat.png"))
        assert reply.success is True
        assert reply.text == "{not json"

    def test_extra_fields_are_ignored(self):
        body = '{"result": {"url": "http://x/y", "fileName": "a"}, "status": 1}'
        assert interpret(body, OutputMode.URL_ONLY, Path("a")).text == "http://x/y"

    @pytest.mark.parametrize("mode", [OutputMode.NAME_AND_URL, OutputMode.URL_ONLY])
    def test_invalid_json(self, mode):
        reply = interpret("{not json", mode, Path("cat.png"))
        assert reply.success is False
        assert reply.error.startswith("invalid JSON reply")

    @pytest.mark.parametrize(
        "body, expected",
        [
            ("[]", "reply is not a JSON object"),
            ('"text"', "reply is not a JSON object"),
            ("{}", "reply has no 'result' field"),
            ('{"result": "http://x/y"}', "'result' is not an object"),
            ('{"result": null}', "'result' is not an object"),
            ('{"result": {}}', "'result' has no 'url' field"),
            ('{"result": {"url": 5}}', "'url' is not a string"),
            ('{"result": {"url": null}}', "'url' is not a string"),
        ],
    )
    def test_shape_diagnostics(self, body, expected):
        reply = interpret(body, OutputMode.NAME_AND_URL, Path("cat.png"))
        assert reply.success is False
        assert reply.error == expected


class TestExtractUrl:
    def test_returns_url(self):
        assert extract_url(VALID) == "http://x/y"

    def test_raises_reply_error(self):
        with pytest.raises(ReplyError, match="no 'result'"):
            extract_url("{}")
