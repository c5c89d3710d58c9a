# topmark:header:start
#
#   project      : Polyrun
#   file         : document.py
#   file_relpath : src/polyrun/pipeline/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Preview document assembly.

The preview document combines the three editor slots:

- markup output becomes the body content,
- style output goes into a ``<style>`` block after a small base stylesheet,
- script preview code runs once the document has loaded.

A console bridge script relays ``console.log/info/warn/error`` calls, uncaught
errors and unhandled promise rejections from the isolated surface to the parent
window as ``{type: "console", level, args}`` messages. `parse_bridge_message`
turns such a message back into a `ConsoleMessage`.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from string import Template
from typing import Any, Final

from polyrun.config.logging import get_logger
from polyrun.core.console import ConsoleLevel, ConsoleMessage

logger = get_logger(__name__)

DEFAULT_TITLE: Final[str] = "Polyrun Preview"

BRIDGE_MESSAGE_TYPE: Final[str] = "console"

CONSOLE_BRIDGE: Final[str] = """\
    const originalConsole = {
        log: console.log,
        warn: console.warn,
        error: console.error,
        info: console.info
    };

    function sendToParent(level, args) {
        try {
            window.parent.postMessage({
                type: 'console',
                level: level,
                args: Array.from(args).map(function (arg) {
                    if (typeof arg === 'object') {
                        try {
                            return JSON.stringify(arg, null, 2);
                        } catch (e) {
                            return String(arg);
                        }
                    }
                    return String(arg);
                })
            }, '*');
        } catch (e) {
            originalConsole.error(e);
        }
    }

    ['log', 'warn', 'error', 'info'].forEach(function (method) {
        console[method] = function () {
            originalConsole[method].apply(console, arguments);
            sendToParent(method, arguments);
        };
    });

    window.addEventListener('error', function (event) {
        sendToParent('error', [event.message + ' (Line: ' + event.lineno + ')']);
    });

    window.addEventListener('unhandledrejection', function (event) {
        sendToParent('error', ['Unhandled Promise Rejection: ' + event.reason]);
    });"""

_DOCUMENT: Final[Template] = Template(
    """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>$title</title>
<style>
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; line-height: 1.6; color: #333; background: #fff; }
$style
</style>
</head>
<body>
$markup
<script>
$bridge

    window.addEventListener('load', function () {
        try {
$script
        } catch (error) {
            sendToParent('error', [error.message]);
        }
    });
</script>
</body>
</html>
"""
)


_SCRIPT_END: Final[re.Pattern[str]] = re.compile(r"</(script)", re.IGNORECASE)
_STYLE_END: Final[re.Pattern[str]] = re.compile(r"</(style)", re.IGNORECASE)


def _escape_script(code: str) -> str:
    # End tags match case-insensitively; any spelling would close the block early
    return _SCRIPT_END.sub(r"<\\/\1", code)


def _escape_style(code: str) -> str:
    return _STYLE_END.sub(r"<\\/\1", code)


def build_preview_document(
    markup: str = "",
    style: str = "",
    script: str = "",
    *,
    title: str = DEFAULT_TITLE,
) -> str:
    """Assemble the preview document from compiled slot contents.

    Args:
        markup (str): Compiled markup, inserted as body content.
        style (str): Compiled stylesheet text.
        script (str): Script preview code, run after the document loads.
        title (str): Document title.

    Returns:
        str: A complete HTML document with the console bridge installed.
    """
    return _DOCUMENT.substitute(
        title=title,
        style=_escape_style(style),
        markup=markup,
        bridge=CONSOLE_BRIDGE,
        script=_escape_script(script),
    )


def parse_bridge_message(data: Mapping[str, Any]) -> ConsoleMessage | None:
    """Convert a console bridge message into a `ConsoleMessage`.

    Returns:
        ConsoleMessage | None: The message, or None if ``data`` is not a console
            bridge message.
    """
    if data.get("type") != BRIDGE_MESSAGE_TYPE:
        return None
    try:
        level = ConsoleLevel(data.get("level", ConsoleLevel.LOG.value))
    except ValueError:
        logger.warning("Unknown console level from bridge: %r", data.get("level"))
        level = ConsoleLevel.LOG
    args: Any = data.get("args", [])
    if isinstance(args, (list, tuple)):
        text = " ".join(str(a) for a in args)
    else:
        text = str(args)
    return ConsoleMessage(level, text)
