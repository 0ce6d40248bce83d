"""Load and validate the YAML message catalog. Used by every user-facing component."""

import os
from pathlib import Path

import yaml

REQUIRED_KEYS = frozenset(
    {
        "login_required_create",
        "login_required_edit",
        "login_required_delete",
        "login_required_password",
        "login_required_save",
        "fetch_failed",
        "save_failed",
        "delete_failed",
        "password_change_failed",
        "server_unreachable",
        "server_error",
        "invalid_credentials",
        "login_failed",
        "register_failed",
        "first_name_required",
        "last_name_required",
        "email_required",
        "email_invalid",
        "category_required",
        "subcategory_required",
        "phone_required",
        "phone_invalid",
        "date_of_birth_required",
        "date_of_birth_invalid",
        "password_required",
        "passwords_mismatch",
    }
)


def _package_root() -> Path:
    return Path(__file__).resolve().parent.parent


def get_messages_path() -> Path:
    """Return path to the catalog (CONTACTBOOK_MESSAGES_PATH env or flows/messages.yaml)."""
    default = _package_root() / "flows" / "messages.yaml"
    path = os.environ.get("CONTACTBOOK_MESSAGES_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_messages(path: Path | None = None) -> dict[str, str]:
    """Load the catalog YAML and return the key -> text dict. Validates required keys."""
    if path is None:
        path = get_messages_path()
    raw = path.read_text(encoding="utf-8")
    doc = yaml.safe_load(raw)
    if not isinstance(doc, dict):
        raise ValueError("Message catalog YAML must be a dict")
    messages = doc.get("messages")
    if not isinstance(messages, dict) or not messages:
        raise ValueError("Message catalog must have a non-empty 'messages' mapping")
    missing = sorted(REQUIRED_KEYS - set(messages))
    if missing:
        raise ValueError(f"Message catalog is missing keys: {', '.join(missing)}")
    return {str(k): str(v) for k, v in messages.items()}


# Module-level cache for the loaded catalog
_messages_cache: dict[str, str] | None = None


def get_messages(cache: bool = True) -> dict[str, str]:
    """Load the catalog (cached by default). Pass cache=False to reload."""
    global _messages_cache
    if cache and _messages_cache is not None:
        return _messages_cache
    _messages_cache = load_messages()
    return _messages_cache


def message(key: str, **template_vars) -> str:
    """Return the text for key with {name}-style placeholders filled in."""
    text = get_messages().get(key) or key
    for k, v in template_vars.items():
        text = text.replace("{" + k + "}", str(v) if v is not None else "")
    return text
