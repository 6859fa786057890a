"""
Payroll settings with built-in defaults.

Override any key through settings.PAYROLL (see core/settings.py).
"""
from django.conf import settings

DEFAULTS = {
    "CURRENCY": "BDT",
    # Share of the maximum recoverable amount proposed as the deduction
    "ADVANCE_SUGGESTED_RECOVERY_PERCENT": 100,
    "ADVANCE_HISTORY_PAGE_SIZE": 10,
    "ADVANCE_HISTORY_MAX_PAGE_SIZE": 100,
}


def payroll_setting(name):
    overrides = getattr(settings, "PAYROLL", {}) or {}
    if name in overrides:
        return overrides[name]
    return DEFAULTS[name]
