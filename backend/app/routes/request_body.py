"""
Bloggy Backend — Request Body Parsing
=======================================

What:  Reads the create routes' fields from either a JSON object or form
       data (urlencoded or multipart), under the same field names.
Who:   posts.create_post, categories.create_category.

Non-string values (numbers, lists, file parts in a text field) are read as
None, so they surface as missing fields in validation.
"""

from typing import Any, Dict, Mapping, Optional, Sequence

from fastapi import Request

from app.exceptions import ValidationError


def is_json(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.split(";")[0].strip().lower() == "application/json"


def is_form(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.startswith(("multipart/form-data", "application/x-www-form-urlencoded"))


async def read_json_object(request: Request) -> Dict[str, Any]:
    """
    Raises:
        ValidationError: body is not valid JSON, or not a JSON object (→ 400)
    """
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError(message="Request body is not valid JSON.")

    if not isinstance(payload, dict):
        raise ValidationError(
            message="Request body must be a JSON object.",
            context={"received": type(payload).__name__},
        )
    return payload


def text_fields(source: Mapping[str, Any], names: Sequence[str]) -> Dict[str, Optional[str]]:
    """Pick the named fields, keeping only string values."""
    fields: Dict[str, Optional[str]] = {}
    for name in names:
        value = source.get(name)
        fields[name] = value if isinstance(value, str) else None
    return fields


def request_body_openapi(properties: Dict[str, Dict[str, Any]], with_image: bool = False) -> Dict[str, Any]:
    """OpenAPI requestBody entry for a route that reads its body by hand."""
    form_properties = dict(properties)
    if with_image:
        form_properties["image"] = {"type": "string", "format": "binary"}

    return {
        "requestBody": {
            "content": {
                "application/json": {
                    "schema": {"type": "object", "properties": properties},
                },
                "multipart/form-data": {
                    "schema": {"type": "object", "properties": form_properties},
                },
                "application/x-www-form-urlencoded": {
                    "schema": {"type": "object", "properties": properties},
                },
            },
        },
    }
