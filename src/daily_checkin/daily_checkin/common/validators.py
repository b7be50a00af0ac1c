from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_image_content_type(content_type: str | None) -> str:
    ct = (content_type or "").strip().lower()
    if not ct.startswith("image/"):
        raise ValidationError("Only image files can be uploaded")
    return ct
