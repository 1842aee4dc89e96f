"""Dispatcher: runs one tool invocation and builds its result envelope.

Each tool maps to a handler that makes exactly one backend call (or one
local transform) and renders the outcome as text. Handlers render the
failures they expect (bad arguments, backend errors, malformed decoder
input) as ordinary text results. Anything else is caught by
:meth:`Dispatcher.handle` and returned with ``is_error`` set, so no
exception ever reaches the protocol layer.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from burp_mcp.backend.client import BurpClient
from burp_mcp.core.errors import (
    BackendError,
    TransformError,
    ValidationError,
)
from burp_mcp.tools.base import ResultEnvelope
from burp_mcp.tools.catalog import get_operation, operation_names
from burp_mcp.tools.encoding import Encoding

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from burp_mcp.config.schema import BackendConfig
    from burp_mcp.tools.base import Invocation

    Handler = Callable[[dict[str, Any]], Awaitable[ResultEnvelope]]

logger = logging.getLogger(__name__)

UNKNOWN_TASK_ID = "unknown"

_URL_REQUIRED = "Error: URL is required and must be a valid string"
_TASK_ID_REQUIRED = "Task ID is required. Get it from scan_url response."


def _pretty(data: Any) -> str:
    """Render a response body for humans."""
    if isinstance(data, str):
        return data
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _backend_failure(prefix: str, error: BackendError) -> ResultEnvelope:
    text = f"{prefix} failed: {error.status_label} - {error}"
    if error.body is not None:
        text += f"\n{_pretty(error.body)}"
    return ResultEnvelope.of_text(text)


def _require_str(args: dict[str, Any], key: str) -> str:
    value = args.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"Error: '{key}' is required and must be a string")
    return value


def _require_url(args: dict[str, Any]) -> str:
    url = args.get("url")
    if not url or not isinstance(url, str):
        raise ValidationError(_URL_REQUIRED)
    return url


def _optional_task_id(args: dict[str, Any]) -> str | None:
    task_id = args.get("task_id")
    if task_id is None or task_id == "":
        return None
    if isinstance(task_id, bool) or not isinstance(task_id, str | int):
        raise ValidationError("Error: 'task_id' must be a string")
    task_id = str(task_id)
    if task_id == UNKNOWN_TASK_ID:
        raise ValidationError(_TASK_ID_REQUIRED)
    return task_id


def _task_id_from_location(location: str | None) -> str:
    """The task ID is the last path segment of the Location header."""
    if not location:
        return UNKNOWN_TASK_ID
    return location.rstrip("/").rsplit("/", 1)[-1] or UNKNOWN_TASK_ID


def _issue_line(item: Any) -> str:
    if not isinstance(item, dict):
        return f"{item}: N/A - N/A"
    # Scan issue events wrap the issue itself
    issue = item.get("issue") if isinstance(item.get("issue"), dict) else item
    name = issue.get("name") or issue.get("type_index") or "Unknown"
    severity = issue.get("severity") or issue.get("typical_severity") or "N/A"
    confidence = issue.get("confidence") or "N/A"
    return f"{name}: {severity} - {confidence}"


class Dispatcher:
    """Routes invocations to tool handlers.

    The backend client is injected; when omitted one is built from
    *config*. Use as an async context manager, or call :meth:`aclose`,
    to release the client's connections.
    """

    def __init__(self, config: BackendConfig, client: BurpClient | None = None) -> None:
        self._config = config
        self._client = client or BurpClient(config)
        self._handlers: dict[str, Handler] = {
            "scan_url": self._scan_url,
            "get_scan_status": self._get_scan_status,
            "get_issues": self._get_issues,
            "send_request": self._send_request,
            "test_connection": self._test_connection,
            "repeater_send": self._repeater_send,
            "decoder_encode": self._decoder_encode,
            "decoder_decode": self._decoder_decode,
            "comparer_compare": self._comparer_compare,
        }
        missing = operation_names() - self._handlers.keys()
        if missing:
            msg = f"No handler for tools: {sorted(missing)}"
            raise RuntimeError(msg)

    async def __aenter__(self) -> Dispatcher:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def handle(self, invocation: Invocation) -> ResultEnvelope:
        """Run *invocation* and return its result. Never raises."""
        logger.debug("Invoking %s", invocation.name)
        try:
            tool = get_operation(invocation.name)
            args = {**tool.defaults(), **(invocation.arguments or {})}
            try:
                return await self._handlers[tool.name](args)
            except ValidationError as e:
                return ResultEnvelope.of_text(str(e))
        except Exception as e:
            logger.exception("Tool %s failed", invocation.name)
            message = str(e) or type(e).__name__
            body = getattr(e, "body", None)
            if body is not None:
                message += f"\n{_pretty(body)}"
            return ResultEnvelope.error(f"Error: {message}")

    # ── Remote calls ─────────────────────────────────────────────

    async def _scan_url(self, args: dict[str, Any]) -> ResultEnvelope:
        url = _require_url(args)
        scan_type = args.get("scan_type") or "crawl_and_audit"
        try:
            location = await self._client.start_scan(url)
        except BackendError as e:
            logger.warning("Scan of %s failed: %s", url, e)
            return _backend_failure("Scan", e)

        task_id = _task_id_from_location(location)
        return ResultEnvelope.of_text(
            f"✅ Scan started for {url}\n"
            f"Task ID: {task_id}\n"
            f"Scan type: {scan_type}\n"
            "Use 'get_scan_status' with task ID to check progress."
        )

    async def _get_scan_status(self, args: dict[str, Any]) -> ResultEnvelope:
        task_id = _optional_task_id(args)
        if task_id is None:
            raise ValidationError(_TASK_ID_REQUIRED)
        try:
            data = await self._client.get_scan(task_id)
        except BackendError as e:
            logger.warning("Status check for scan %s failed: %s", task_id, e)
            return _backend_failure("Status check", e)

        status = "unknown"
        progress: Any = 0
        if isinstance(data, dict):
            status = data.get("scan_status") or "unknown"
            metrics = data.get("scan_metrics") or {}
            if isinstance(metrics, dict):
                progress = metrics.get("crawl_and_audit_progress") or 0
        return ResultEnvelope.of_text(
            f"Scan Status: {status}\nProgress: {progress}%\nFull details: {_pretty(data)}"
        )

    async def _get_issues(self, args: dict[str, Any]) -> ResultEnvelope:
        task_id = _optional_task_id(args)
        try:
            if task_id is not None:
                data = await self._client.get_scan(task_id)
                issues = data.get("issue_events") if isinstance(data, dict) else None
            else:
                issues = await self._client.get_issue_definitions()
        except BackendError as e:
            logger.warning("Fetching issues failed: %s", e)
            return _backend_failure("Get issues", e)

        if not isinstance(issues, list) or not issues:
            if task_id is not None:
                return ResultEnvelope.of_text(f"No issues found for scan {task_id}")
            return ResultEnvelope.of_text("No issue definitions available")

        kind = "issues" if task_id is not None else "issue definitions"
        summary = "\n".join(_issue_line(issue) for issue in issues)
        return ResultEnvelope.of_text(f"Found {len(issues)} {kind}:\n{summary}")

    async def _send_request(self, args: dict[str, Any]) -> ResultEnvelope:
        url = _require_url(args)
        method = args.get("method") or "GET"
        headers = args.get("headers") or {}
        body = args.get("body") or ""
        if not isinstance(method, str):
            raise ValidationError("Error: 'method' must be a string")
        if not isinstance(headers, dict):
            raise ValidationError("Error: 'headers' must be an object")
        if not isinstance(body, str):
            raise ValidationError("Error: 'body' must be a string")

        try:
            data = await self._client.send_http_request(url, method.upper(), headers, body)
        except BackendError as e:
            logger.warning("Sending %s %s failed: %s", method, url, e)
            return _backend_failure("Send request", e)
        return ResultEnvelope.of_text(f"HTTP Request sent to {url}\nResponse: {_pretty(data)}")

    async def _repeater_send(self, args: dict[str, Any]) -> ResultEnvelope:
        return await self._send_request(args)

    async def _test_connection(self, args: dict[str, Any]) -> ResultEnvelope:
        base_url = self._config.base_url
        try:
            status = await self._client.ping()
        except BackendError as e:
            logger.warning("Connection test against %s failed: %s", base_url, e)
            return ResultEnvelope.of_text(
                f"❌ Connection failed: {e.status_label}\n"
                f"Check if Burp Suite is running and REST API is enabled at {base_url}"
            )
        return ResultEnvelope.of_text(
            "✅ Connection successful!\n"
            f"Burp Suite REST API is accessible at {base_url}\n"
            f"Status: {status}"
        )

    # ── Local transforms ─────────────────────────────────────────

    async def _decoder_encode(self, args: dict[str, Any]) -> ResultEnvelope:
        data = _require_str(args, "data")
        encoding = Encoding.parse(_require_str(args, "encoding"))
        return ResultEnvelope.of_text(f"Encoded: {encoding.encode(data)}")

    async def _decoder_decode(self, args: dict[str, Any]) -> ResultEnvelope:
        data = _require_str(args, "data")
        encoding = Encoding.parse(_require_str(args, "encoding"))
        try:
            decoded = encoding.decode(data)
        except TransformError as e:
            return ResultEnvelope.of_text(f"Decode failed: {e}")
        return ResultEnvelope.of_text(f"Decoded: {decoded}")

    async def _comparer_compare(self, args: dict[str, Any]) -> ResultEnvelope:
        first = _require_str(args, "data1")
        second = _require_str(args, "data2")
        verdict = "Identical" if first == second else "Different"
        return ResultEnvelope.of_text(f"Comparison: {verdict}")
