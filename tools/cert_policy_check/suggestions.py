"""Suggestion generation for cert-policy-check findings."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

SuggestionHandler = Callable[[Dict[str, Any]], Optional[str]]


def _describe_field(details: Dict[str, Any]) -> str:
    """Return a human-friendly label for the field in a finding."""
    name = details.get("field")
    if not name:
        return "this field"
    return f"'{name}'"


def _suggest_required_field(details: Dict[str, Any]) -> str:
    """Suggest filling in a mandatory field."""
    label = _describe_field(details)
    if details.get("field") in {"sites", "site_groups"}:
        return f"Add at least one entry to {label}."
    return f"Set {label} to a non-empty string."


def _suggest_duplicate_site(details: Dict[str, Any]) -> str:
    """Suggest keeping each site in a single site group."""
    site = details.get("site", "the site")
    return f"List '{site}' in only one site group of this tenant."


def _suggest_enumerated(details: Dict[str, Any]) -> str:
    """Suggest one of the accepted values, or leaving the field empty."""
    label = _describe_field(details)
    expected = details.get("expected")
    if expected:
        return f"Use one of: {expected}; or leave {label} empty for the default."
    return f"Leave {label} empty to use the default."


def _suggest_credentials(details: Dict[str, Any]) -> str:
    """Suggest completing or removing external-account credentials."""
    return "Provide all of 'email', 'kid' and 'hmac_key', or remove 'cert_provider_creds'."


def _suggest_site_mode(details: Dict[str, Any]) -> str:
    """Suggest matching the site to its group's cert mode."""
    site = details.get("value", "the site")
    expected = details.get("expected")
    if expected:
        return f"Rename '{site}' so it matches '{expected}' or move it to a group with a suitable cert_mode."
    return f"Rename '{site}' or move it to a group with a suitable cert_mode."


SUGGESTION_HANDLERS: Dict[str, SuggestionHandler] = {
    "required-field": _suggest_required_field,
    "duplicate-site": _suggest_duplicate_site,
    "invalid-cert-mode": _suggest_enumerated,
    "invalid-cert-provider": _suggest_enumerated,
    "invalid-cert-type": _suggest_enumerated,
    "credentials-format": _suggest_credentials,
    "site-mode-mismatch": _suggest_site_mode,
}


def get_suggestion(code: Optional[str], details: Optional[Dict[str, Any]] = None) -> Optional[str]:
    """Return an actionable suggestion for a finding code, if one is known."""

    if not code:
        return None
    handler = SUGGESTION_HANDLERS.get(code)
    if handler is None:
        return None
    return handler(details or {})
