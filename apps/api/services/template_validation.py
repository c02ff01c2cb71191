"""
Validation of model-generated workout templates.

The model's answer goes through three checks, each returning a tagged
result instead of raising:

1. normalize_model_json: best-effort removal of Markdown code fences. The
   model is asked for bare JSON but sometimes wraps it anyway; this is a
   cleanup step, not a guarantee about the model's output.
2. validate_template: JSON parse plus structural validation against
   GeneratedTemplate (enumerations, 1-12 exercises, numeric ranges).
3. find_unknown_slugs: every exercise slug must exist in the library.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Union

from pydantic import ValidationError as PydanticValidationError

from schemas import GeneratedTemplate


@dataclass(frozen=True)
class TemplateValid:
    template: GeneratedTemplate


@dataclass(frozen=True)
class TemplateInvalid:
    reason: str  # "invalid_json" | "invalid_structure"
    errors: List[Dict[str, Any]] = field(default_factory=list)


TemplateValidation = Union[TemplateValid, TemplateInvalid]


def normalize_model_json(raw_text: str) -> str:
    """Trim the text and strip one leading and one trailing code fence."""
    text = (raw_text or "").strip()
    if text.startswith("```json"):
        text = text[len("```json"):]
    elif text.startswith("```"):
        text = text[len("```"):]
    if text.endswith("```"):
        text = text[:-len("```")]
    return text.strip()


def _structure_errors(exc: PydanticValidationError) -> List[Dict[str, Any]]:
    return [
        {
            "path": ".".join(str(p) for p in err.get("loc", ())),
            "message": err.get("msg", ""),
            "type": err.get("type", ""),
        }
        for err in exc.errors()
    ]


def validate_template(raw_text: str) -> TemplateValidation:
    """Parse and structurally validate the model's answer."""
    text = normalize_model_json(raw_text)
    try:
        parsed = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        return TemplateInvalid(reason="invalid_json", errors=[{"path": "", "message": str(e), "type": "json"}])

    try:
        template = GeneratedTemplate.model_validate(parsed)
    except PydanticValidationError as e:
        return TemplateInvalid(reason="invalid_structure", errors=_structure_errors(e))
    return TemplateValid(template=template)


def find_unknown_slugs(template: GeneratedTemplate, known_slugs: Iterable[str]) -> List[str]:
    """
    Every exercise slug missing from the library, in first-seen order.

    Collects all of them rather than stopping at the first so the error
    reports the full list.
    """
    known = set(known_slugs)
    unknown: List[str] = []
    for exercise in template.exercises:
        slug = exercise.exercise_slug
        if slug not in known and slug not in unknown:
            unknown.append(slug)
    return unknown


def resolve_slugs(template: GeneratedTemplate, slug_to_id: Mapping[str, int]) -> List[int]:
    """Library ids for each exercise, in template order. Call after find_unknown_slugs."""
    return [slug_to_id[e.exercise_slug] for e in template.exercises]
