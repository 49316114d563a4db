"""Classify -> plan -> generate -> validate -> format."""

from pepperpal.pipeline.classifier import classify
from pepperpal.pipeline.generator import Generator
from pepperpal.pipeline.orchestrator import Pipeline
from pepperpal.pipeline.planner import plan, select_model
from pepperpal.pipeline.types import (
    Classification,
    DeliveryPlan,
    GeneratedResponse,
    Intent,
    ModelTier,
    ResponseClass,
    ResponsePlan,
    Strategy,
    ValidatedResponse,
)
from pepperpal.pipeline.validator import find_forbidden_output, validate

__all__ = [
    "Classification",
    "DeliveryPlan",
    "GeneratedResponse",
    "Generator",
    "Intent",
    "ModelTier",
    "Pipeline",
    "ResponseClass",
    "ResponsePlan",
    "Strategy",
    "ValidatedResponse",
    "classify",
    "find_forbidden_output",
    "plan",
    "select_model",
    "validate",
]
