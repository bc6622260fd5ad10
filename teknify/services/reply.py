"""
Reply interpretation.

Turns the body of a successful upload reply into display text. The expected
shape is ``{"result": {"url": "<string>", ...}, ...}``; each step of the walk
has its own diagnostic so a bad reply says which expectation failed.
"""
import json
from pathlib import Path
from typing import Any, Dict

from ..models import OutputMode, Reply


class ReplyError(ValueError):
    """Raised by a validation stage when the reply has the wrong shape."""


def _parse(body: str) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ReplyError(f"invalid JSON reply: {exc}") from exc


def _as_object(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ReplyError("reply is not a JSON object")
    return data


def _result(data: Dict[str, Any]) -> Dict[str, Any]:
    if "result" not in data:
        raise ReplyError("reply has no 'result' field")
    result = data["result"]
    if not isinstance(result, dict):
        raise ReplyError("'result' is not an object")
    return result


def _url(result: Dict[str, Any]) -> str:
    if "url" not in result:
        raise ReplyError("'result' has no 'url' field")
    url = result["url"]
    if not isinstance(url, str):
        raise ReplyError("'url' is not a string")
    return url


def extract_url(body: str) -> str:
    """Return ``result.url`` from a reply body or raise ReplyError."""
    return _url(_result(_as_object(_parse(body))))


def interpret(body: str, mode: OutputMode, path: Path) -> Reply:
    """
    Interpret a reply body for the given output mode.

    Pure: never touches the network or file system.

    Args:
        body: Response body text
        mode: Selected output mode
        path: Local path as given by the user, used for NAME_AND_URL

    Returns:
        Reply.ok(display_text) or Reply.fail(diagnostic)
    """
    if mode == OutputMode.JSON:
        return Reply.ok(body)

    try:
        url = extract_url(body)
    except ReplyError as exc:
        return Reply.fail(str(exc))

    if mode == OutputMode.URL_ONLY:
        return Reply.ok(url)
    return Reply.ok(f"{path}: {url}")
