"""
Shared validation functions for Pydantic schemas.

Length limits come from settings so deployments can tune them without code changes.
"""
import re
from urllib.parse import urlparse

from core.config import get_settings

# Deliberately loose: one "@", no whitespace, and a dot somewhere in the domain
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str) -> str:
    """Trim an email address and check its basic shape."""
    trimmed = email.strip()
    if not EMAIL_PATTERN.match(trimmed):
        raise ValueError("Invalid email address")
    return trimmed


def validate_url(url: str) -> str:
    """
    Require an absolute URL with a scheme and host.

    The URL is stored exactly as given (apart from surrounding whitespace), so a
    bookmark links back to what the user saved.
    """
    trimmed = url.strip()
    try:
        parsed = urlparse(trimmed)
    except ValueError as e:
        raise ValueError("Invalid URL") from e
    if not parsed.scheme or not parsed.netloc:
        raise ValueError("Invalid URL")
    return trimmed


def validate_title_length(title: str | None) -> str | None:
    """Validate that title doesn't exceed maximum length."""
    settings = get_settings()
    if title is not None and len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


def validate_description_length(description: str | None) -> str | None:
    """Validate that description doesn't exceed maximum length."""
    settings = get_settings()
    if description is not None and len(description) > settings.max_description_length:
        max_len = settings.max_description_length
        raise ValueError(
            f"Description exceeds maximum length of {max_len:,} characters "
            f"(got {len(description):,} characters).",
        )
    return description


def validate_category_name_length(name: str | None) -> str | None:
    """Validate that a category name doesn't exceed maximum length."""
    settings = get_settings()
    if name is not None and len(name) > settings.max_category_name_length:
        raise ValueError(
            f"Category name exceeds maximum length of "
            f"{settings.max_category_name_length:,} characters.",
        )
    return name


def validate_tags(tags: list[str]) -> list[str]:
    """
    Trim and validate a list of tags.

    Tags are free-form. Order is preserved and duplicates are kept.

    Raises:
        ValueError: If a tag is blank or too long, or there are too many tags.
    """
    settings = get_settings()
    if len(tags) > settings.max_tags:
        raise ValueError(f"A bookmark can have at most {settings.max_tags} tags.")

    cleaned = []
    for tag in tags:
        trimmed = tag.strip()
        if not trimmed:
            raise ValueError("Tag cannot be empty")
        if len(trimmed) > settings.max_tag_length:
            raise ValueError(
                f"Tag '{trimmed[:20]}...' exceeds maximum length of "
                f"{settings.max_tag_length} characters.",
            )
        cleaned.append(trimmed)
    return cleaned
