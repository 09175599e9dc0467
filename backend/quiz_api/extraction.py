from __future__ import annotations
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union


@dataclass(frozen=True)
class Extracted:
	items: List[Dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class ExtractionFailed:
	reason: str
	raw: str


Extraction = Union[Extracted, ExtractionFailed]


def _object_span(text: str) -> str | None:
	first = text.find("{")
	last = text.rfind("}")
	if first == -1 or last == -1 or last <= first:
		return None
	return text[first : last + 1]


def extract_items(text: str) -> Extraction:
	"""Pull the ``items`` list out of free-form oracle output.

	The oracle may wrap its JSON in prose or code fences, so only the span
	between the first "{" and the last "}" is parsed.
	"""
	candidate = _object_span(text or "")
	if candidate is None:
		return ExtractionFailed("no JSON object found", text)
	try:
		data = json.loads(candidate)
	except json.JSONDecodeError as err:
		return ExtractionFailed(f"invalid JSON: {err.msg}", text)
	items = data.get("items", [])
	if items is None:
		items = []
	if not isinstance(items, list):
		return ExtractionFailed("'items' is not a list", text)
	return Extracted([it for it in items if isinstance(it, dict)])
