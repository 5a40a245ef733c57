from .compatibility import CompatibilityResult, CompatibilityValidator, validate

__all__ = ["CompatibilityResult", "CompatibilityValidator", "validate"]
