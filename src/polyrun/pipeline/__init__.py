# topmark:header:start
#
#   project      : Polyrun
#   file         : __init__.py
#   file_relpath : src/polyrun/pipeline/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution orchestration: slots, surfaces, console history and the preview document."""

from __future__ import annotations

from polyrun.pipeline.console import ConsoleView
from polyrun.pipeline.document import build_preview_document, parse_bridge_message
from polyrun.pipeline.outcomes import OutcomeBucket, RunOutcome, classify
from polyrun.pipeline.runner import EditorSlot, Playground, RunReport, SlotResult
from polyrun.pipeline.surface import DeferredSurface, ExecutionSurface

__all__ = [
    "ConsoleView",
    "DeferredSurface",
    "EditorSlot",
    "ExecutionSurface",
    "OutcomeBucket",
    "Playground",
    "RunOutcome",
    "RunReport",
    "SlotResult",
    "build_preview_document",
    "classify",
    "parse_bridge_message",
]
