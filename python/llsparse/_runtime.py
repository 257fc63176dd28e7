import os

_TRUTHY = {"1", "true", "yes", "on"}

_default_sep = " "
_current_sep = _default_sep
_debug_checks = False


def _reset_from_env() -> None:
    # Environment only seeds the defaults; setters never write it back
    global _current_sep, _debug_checks
    _current_sep = os.environ.get("LLSPARSE_PRINT_SEP", _default_sep)
    env = os.environ.get("LLSPARSE_DEBUG_CHECKS", "")
    _debug_checks = env.strip().lower() in _TRUTHY


def set_print_options(sep: str = None) -> None:
    global _current_sep
    if sep is not None:
        _current_sep = str(sep)


def get_print_options() -> dict:
    return {"sep": _current_sep}


def set_debug_checks(enabled: bool) -> None:
    global _debug_checks
    _debug_checks = bool(enabled)


def get_debug_checks() -> bool:
    return _debug_checks


_reset_from_env()
