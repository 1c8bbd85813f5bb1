"""Access to the ``[custom]`` table of the active domain's configuration."""

from protean.utils.globals import current_domain


def custom_setting(name: str, default=None):
    """Return a custom setting from ``domain.toml``, or ``default`` if unset."""
    custom = current_domain.config.get("custom") or {}
    return custom.get(name, default)


def rating_lock_timeout() -> float:
    return float(custom_setting("RATING_LOCK_TIMEOUT", 5.0))


def notifications_enabled() -> bool:
    return bool(custom_setting("NOTIFICATIONS_ENABLED", True))
