"""请求输入校验引擎."""

from fieldguard.validation.evaluator import FieldEvaluator, SourceMode
from fieldguard.validation.orchestrator import RequestSchemas, RequestValidator, ValidationOutcome
from fieldguard.validation.policy import UnknownKeyPolicy

__all__ = [
    "FieldEvaluator",
    "RequestSchemas",
    "RequestValidator",
    "SourceMode",
    "UnknownKeyPolicy",
    "ValidationOutcome",
]
