"""Test generators - heuristic synthesis and template rendering."""

from .base import GeneratedSuite, TestCaseDescriptor, TestSynthesizerBase
from .heuristics import NameHeuristics, ValueHeuristics, quality_value, sample_value
from .literals import NAN, UNDEFINED, js_literal, to_jsonable
from .synthesizer import TestCaseSynthesizer, build_suite, synthesize
from .templates import (
    DEFAULT_TEMPLATES,
    DirectoryTemplateSource,
    StaticTemplateSource,
    TemplateCatalog,
    TemplateSource,
    render,
)

__all__ = [
    "TestSynthesizerBase",
    "TestCaseDescriptor",
    "GeneratedSuite",
    "TestCaseSynthesizer",
    "synthesize",
    "build_suite",
    "ValueHeuristics",
    "NameHeuristics",
    "sample_value",
    "quality_value",
    "UNDEFINED",
    "NAN",
    "js_literal",
    "to_jsonable",
    "render",
    "TemplateSource",
    "StaticTemplateSource",
    "DirectoryTemplateSource",
    "TemplateCatalog",
    "DEFAULT_TEMPLATES",
]
